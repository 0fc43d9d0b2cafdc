from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import permissions, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken

from apps.authentication.models import PasswordResetToken, User
from apps.authentication.serializers import (
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    UserLoginSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from apps.logging.services import LoggerService

PASSWORD_RESET_SENT = "If an account exists with this email, a password reset link has been sent"

MessageResponse = inline_serializer(
    name="MessageResponse",
    fields={"message": serializers.CharField()},
)

TokenPairResponse = inline_serializer(
    name="TokenPairResponse",
    fields={
        "user": UserSerializer(),
        "access": serializers.CharField(),
        "refresh": serializers.CharField(),
    },
)


def token_pair_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        "user": UserSerializer(user).data,
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


@extend_schema(tags=["Authentication"])
class AuthViewSet(viewsets.GenericViewSet):
    """
    Registration and credential login. Both return a JWT pair so the
    client can authenticate subsequent requests with a Bearer token.
    Password reset runs through an emailed single-use token.
    """

    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    serializer_class = UserSerializer

    def get_client_ip(self, request):
        """Extract client IP address from request headers."""
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0]
        return request.META.get("REMOTE_ADDR")

    @extend_schema(
        operation_id="auth_register",
        summary="User Registration",
        request=UserRegistrationSerializer,
        responses={201: TokenPairResponse},
    )
    @action(detail=False, methods=["post"], url_path="register")
    @transaction.atomic
    def register(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        LoggerService.log_info(
            action="user_registered",
            user=user,
            ip_address=self.get_client_ip(request),
            details={"email": user.email},
        )

        return Response(token_pair_for(user), status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="auth_login",
        summary="User Login",
        request=UserLoginSerializer,
        responses={200: TokenPairResponse},
    )
    @action(detail=False, methods=["post"], url_path="login")
    def login(self, request):
        serializer = UserLoginSerializer(
            data=request.data, context={"request": request}
        )
        if not serializer.is_valid():
            LoggerService.log_warning(
                action="login_failed",
                ip_address=self.get_client_ip(request),
                details={"email": request.data.get("email", "")},
            )
            serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        LoggerService.log_info(
            action="user_login",
            user=user,
            ip_address=self.get_client_ip(request),
        )
        return Response(token_pair_for(user))

    @extend_schema(
        operation_id="auth_password_reset_request",
        summary="Request Password Reset",
        description=(
            "Email a single-use reset link valid for one hour. The response is "
            "identical whether or not the email belongs to an account."
        ),
        request=PasswordResetRequestSerializer,
        responses={200: MessageResponse},
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="password-reset/request",
        url_name="password-reset-request",
    )
    @transaction.atomic
    def password_reset_request(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]

        user = User.objects.filter(email__iexact=email, is_active=True).first()
        if user is None:
            return Response({"message": PASSWORD_RESET_SENT})

        _, raw_token = PasswordResetToken.issue(user)
        reset_url = f"{settings.FRONTEND_URL}/reset-password?token={raw_token}"
        try:
            send_mail(
                subject="Reset your Quest password",
                message=(
                    f"Hi {user.name or user.email},\n\n"
                    f"Use the link below to choose a new password:\n{reset_url}\n\n"
                    f"The link expires in {settings.QUEST_PASSWORD_RESET_TTL_MINUTES} "
                    "minutes. If you did not ask for a reset, ignore this email."
                ),
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[user.email],
            )
        except Exception as e:
            LoggerService.log_error(
                action="password_reset_email_failed",
                error=str(e),
                user=user,
                ip_address=self.get_client_ip(request),
            )

        LoggerService.log_info(
            action="password_reset_requested",
            user=user,
            ip_address=self.get_client_ip(request),
        )
        return Response({"message": PASSWORD_RESET_SENT})

    @extend_schema(
        operation_id="auth_password_reset_confirm",
        summary="Confirm Password Reset",
        request=PasswordResetConfirmSerializer,
        responses={200: MessageResponse},
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="password-reset/confirm",
        url_name="password-reset-confirm",
    )
    @transaction.atomic
    def password_reset_confirm(self, request):
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        token = PasswordResetToken.find_valid(serializer.validated_data["token"])
        if token is None:
            raise ValidationError("Invalid or expired reset link")

        user = token.user
        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password", "updated_at"])
        PasswordResetToken.objects.filter(user=user).delete()

        LoggerService.log_info(
            action="password_reset_completed",
            user=user,
            ip_address=self.get_client_ip(request),
        )
        return Response({"message": "Password has been reset"})
