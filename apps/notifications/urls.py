"""URL configuration for Notifications app."""

from django.urls import include, path

from rest_framework.routers import SimpleRouter

from apps.notifications.viewsets import NotificationViewSet

router = SimpleRouter()
router.register(r"", NotificationViewSet, basename="notification")

urlpatterns = [
    path("", include(router.urls)),
]
