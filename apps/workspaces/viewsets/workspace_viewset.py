from django.db import transaction
from django.shortcuts import get_object_or_404

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.workspaces.models import Workspace, WorkspaceMember
from apps.workspaces.permissions import (
    CanAccessWorkspace,
    IsWorkspaceAdmin,
    IsWorkspaceOwner,
)
from apps.workspaces.serializers import (
    MemberRoleSerializer,
    WorkspaceCreateSerializer,
    WorkspaceMemberSerializer,
    WorkspaceSerializer,
    WorkspaceUpdateSerializer,
)
from apps.workspaces.services import WorkspaceService, accessible_workspaces


@extend_schema_view(
    list=extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_list",
        summary="List Workspaces",
        description="Workspaces the caller owns or belongs to.",
    ),
    retrieve=extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_retrieve",
        summary="Get Workspace Details",
    ),
    create=extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_create",
        summary="Create Workspace",
        description="The caller becomes the owner and an ADMIN member. Slug defaults to one derived from the name.",
        request=WorkspaceCreateSerializer,
        responses={201: WorkspaceSerializer},
    ),
    partial_update=extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_partial_update",
        summary="Update Workspace",
        request=WorkspaceUpdateSerializer,
        responses={200: WorkspaceSerializer},
    ),
    destroy=extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_destroy",
        summary="Delete Workspace",
        description="Owner only. Deletes every project, issue, member and invitation of the workspace.",
    ),
)
class WorkspaceViewSet(viewsets.ModelViewSet):
    serializer_class = WorkspaceSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    search_fields = ["name", "slug"]
    ordering_fields = ["name", "created_at"]

    def get_permissions(self):
        """Assign permissions based on action."""
        if self.action == "partial_update":
            return [IsAuthenticated(), IsWorkspaceAdmin()]
        elif self.action == "destroy":
            return [IsAuthenticated(), IsWorkspaceOwner()]
        elif self.action in [
            "retrieve",
            "members",
            "member_detail",
            "remove_member",
            "by_slug",
        ]:
            return [IsAuthenticated(), CanAccessWorkspace()]
        return [IsAuthenticated()]

    def get_queryset(self):
        # Detail routes see every workspace so a denied lookup answers 403, not 404
        if self.action == "list":
            queryset = accessible_workspaces(self.request.user)
        else:
            queryset = Workspace.objects.all()
        return queryset.select_related("owner")

    def create(self, request, *args, **kwargs):
        serializer = WorkspaceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        workspace = WorkspaceService.create_workspace(
            request.user, **serializer.validated_data
        )

        LoggerService.log_info(
            action="workspace_created",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={"workspace_id": str(workspace.id), "slug": workspace.slug},
        )

        data = WorkspaceSerializer(workspace, context={"request": request}).data
        return Response(data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        workspace = self.get_object()
        serializer = WorkspaceUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        workspace = WorkspaceService.update_workspace(
            request.user, workspace, **serializer.validated_data
        )

        LoggerService.log_info(
            action="workspace_updated",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "workspace_id": str(workspace.id),
                "updated_fields": sorted(serializer.validated_data.keys()),
            },
        )

        return Response(WorkspaceSerializer(workspace, context={"request": request}).data)

    @transaction.atomic
    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="workspace_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"workspace_id": str(instance.id), "slug": instance.slug},
        )
        instance.delete()

    @extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_by_slug",
        summary="Get Workspace by Slug",
        responses={200: WorkspaceSerializer},
    )
    @action(detail=False, methods=["get"], url_path=r"by-slug/(?P<slug>[a-z0-9-]+)")
    def by_slug(self, request, slug=None):
        workspace = get_object_or_404(Workspace.objects.select_related("owner"), slug=slug)
        self.check_object_permissions(request, workspace)
        return Response(WorkspaceSerializer(workspace, context={"request": request}).data)

    @extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_members_list",
        summary="List Workspace Members",
        responses={200: WorkspaceMemberSerializer(many=True)},
    )
    @action(detail=True, methods=["get"], url_path="members")
    def members(self, request, pk=None):
        workspace = self.get_object()
        members = (
            WorkspaceMember.objects.filter(workspace=workspace)
            .select_related("user", "workspace")
            .order_by("joined_at")
        )
        serializer = WorkspaceMemberSerializer(
            members, many=True, context={"request": request}
        )
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_members_update_role",
        summary="Change Member Role",
        request=MemberRoleSerializer,
        responses={200: WorkspaceMemberSerializer},
    )
    @action(
        detail=True,
        methods=["patch"],
        url_path=r"members/(?P<user_id>[0-9a-fA-F-]{36})",
    )
    def member_detail(self, request, pk=None, user_id=None):
        workspace = self.get_object()
        serializer = MemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = WorkspaceService.change_member_role(
            request.user, workspace, user_id, serializer.validated_data["role"]
        )

        LoggerService.log_info(
            action="workspace_member_role_changed",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "workspace_id": str(workspace.id),
                "member_user_id": str(user_id),
                "role": member.role,
            },
        )
        return Response(WorkspaceMemberSerializer(member).data)

    @extend_schema(
        tags=["Workspaces"],
        operation_id="workspaces_members_remove",
        summary="Remove Member",
        description="Owner or ADMIN only. The workspace owner cannot be removed.",
    )
    @member_detail.mapping.delete
    def remove_member(self, request, pk=None, user_id=None):
        workspace = self.get_object()
        WorkspaceService.remove_member(request.user, workspace, user_id)

        LoggerService.log_info(
            action="workspace_member_removed",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={"workspace_id": str(workspace.id), "member_user_id": str(user_id)},
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
