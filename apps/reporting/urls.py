from django.urls import include, path

from rest_framework.routers import SimpleRouter

from .viewsets import SavedFilterViewSet

router = SimpleRouter()
router.register(r"saved-filters", SavedFilterViewSet, basename="saved-filter")

urlpatterns = [
    path("", include(router.urls)),
]
