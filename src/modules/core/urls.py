from django.urls import path

from modules.core.views import IdentityView, health_check

urlpatterns = [
    path("health", health_check, name="health_check"),
    path("api/v1/me", IdentityView.as_view(), name="identity_me"),
]
