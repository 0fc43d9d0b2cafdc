from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import permissions, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.authentication.serializers import UserSerializer, UserUpdateSerializer
from apps.logging.services import LoggerService

User = get_user_model()


@extend_schema_view(
    list=extend_schema(
        tags=["Authentication"],
        operation_id="users_list",
        summary="Search users sharing a workspace",
        description="Users who own or belong to a workspace the caller can access. Supports `?search=`.",
    ),
    retrieve=extend_schema(
        tags=["Authentication"], operation_id="users_retrieve", summary="Get user"
    ),
)
class UserViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]
    search_fields = ["email", "name"]
    ordering = ["name", "email"]

    def get_queryset(self):
        user = self.request.user
        shared = (
            Q(workspace_memberships__workspace__members__user=user)
            | Q(workspace_memberships__workspace__owner=user)
            | Q(owned_workspaces__members__user=user)
            | Q(id=user.id)
        )
        return User.objects.filter(shared, is_active=True).distinct()

    @extend_schema(
        tags=["Authentication"],
        operation_id="users_me",
        summary="Get Current User",
        responses={200: UserSerializer},
    )
    @action(detail=False, methods=["get"], url_path="me")
    def me(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        tags=["Authentication"],
        operation_id="users_update_me",
        summary="Update Current User",
        request=UserUpdateSerializer,
        responses={200: UserSerializer},
    )
    @me.mapping.patch
    @transaction.atomic
    def update_me(self, request):
        serializer = UserUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        LoggerService.log_info(
            action="user_profile_updated",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={"updated_fields": sorted(serializer.validated_data.keys())},
        )
        return Response(UserSerializer(request.user).data)
