from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import api

app_name = "notifications"

router = DefaultRouter()
router.register(r"notifications", api.NotificationViewSet, basename="notification")
router.register(r"pendency-notifications", api.PendencyNotificationViewSet, basename="pendency-notification")
router.register(r"scheduled-notifications", api.ScheduledNotificationViewSet, basename="scheduled-notification")
router.register(r"user-preferences", api.UserPreferencesViewSet, basename="user-preferences")

urlpatterns = [
    path("", include(router.urls)),
]
