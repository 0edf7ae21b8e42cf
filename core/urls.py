from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Django auth owns login/logout/password change
    path("accounts/", include("django.contrib.auth.urls")),

    # Dashboard app owns home, reports and settings
    path("", include("dashboard.urls")),

    # calendar app owns these routes
    path("calendar/", include("calendar_app.urls")),

    path("events/", include("events.urls")),
    path("expenses/", include("expenses.urls")),
    path("users/", include("accounts.urls")),
]
