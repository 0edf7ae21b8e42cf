from django.urls import path
from . import views

app_name = "calendar"

urlpatterns = [
    path("", views.calendar_year, name="calendar_year"),
    path("month/", views.calendar_month, name="calendar_month"),
    path("day/", views.calendar_day, name="calendar_day"),
]
