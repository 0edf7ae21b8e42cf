from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path("", views.user_list, name="user_list"),
    path("add/", views.user_create, name="user_create"),
    path("<int:user_id>/role/", views.user_change_role, name="user_change_role"),
    path("<int:user_id>/delete/", views.user_delete, name="user_delete"),
    path("me/", views.profile_edit, name="profile"),
]
