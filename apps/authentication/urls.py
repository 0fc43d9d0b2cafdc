from django.urls import include, path

from drf_spectacular.utils import extend_schema
from rest_framework.routers import SimpleRouter
from rest_framework_simplejwt.views import TokenRefreshView

from .viewsets import AuthViewSet, UserViewSet


class CustomTokenRefreshView(TokenRefreshView):
    """Wraps SimpleJWT TokenRefreshView with proper Swagger documentation"""

    @extend_schema(
        tags=["Authentication"],
        operation_id="auth_token_refresh",
        summary="Refresh JWT Token",
        description="Obtain a new access token using a valid refresh token",
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


router = SimpleRouter()
router.register(r"users", UserViewSet, basename="users")
router.register(r"", AuthViewSet, basename="auth")

urlpatterns = [
    path("refresh/", CustomTokenRefreshView.as_view(), name="token_refresh"),
    path("", include(router.urls)),
]
