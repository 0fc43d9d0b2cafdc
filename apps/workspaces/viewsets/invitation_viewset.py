from django.shortcuts import get_object_or_404

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.workspaces.models import Invitation, Workspace
from apps.workspaces.serializers import (
    InvitationCreateSerializer,
    InvitationRespondSerializer,
    InvitationSerializer,
)
from apps.workspaces.services import InvitationService, ensure_workspace_access


class InvitationViewSet(viewsets.GenericViewSet):
    """
    Invitations nested under a workspace (list, create), addressed to the
    caller (mine), and addressed by token (respond) or id (cancel).
    """

    serializer_class = InvitationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_workspace(self):
        workspace = get_object_or_404(Workspace, pk=self.kwargs["workspace_pk"])
        ensure_workspace_access(self.request.user, workspace)
        return workspace

    @extend_schema(
        tags=["Invitations"],
        operation_id="invitations_list",
        summary="List Pending Invitations",
        responses={200: InvitationSerializer(many=True)},
    )
    def list(self, request, workspace_pk=None):
        workspace = self.get_workspace()
        invitations = (
            Invitation.objects.filter(workspace=workspace, status="PENDING")
            .select_related("workspace", "invited_by")
            .order_by("-created_at")
        )
        return Response(InvitationSerializer(invitations, many=True).data)

    @extend_schema(
        tags=["Invitations"],
        operation_id="invitations_create",
        summary="Invite Member",
        description="Owner or ADMIN only. Invitations expire after seven days by default.",
        request=InvitationCreateSerializer,
        responses={201: InvitationSerializer},
    )
    def create(self, request, workspace_pk=None):
        workspace = get_object_or_404(Workspace, pk=workspace_pk)
        serializer = InvitationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        invitation = InvitationService.invite(
            request.user, workspace, **serializer.validated_data
        )

        LoggerService.log_info(
            action="invitation_created",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "workspace_id": str(workspace.id),
                "invitation_id": str(invitation.id),
                "email": invitation.email,
                "role": invitation.role,
            },
        )
        return Response(
            InvitationSerializer(invitation).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(
        tags=["Invitations"],
        operation_id="invitations_mine",
        summary="My Pending Invitations",
        responses={200: InvitationSerializer(many=True)},
    )
    def mine(self, request):
        invitations = (
            Invitation.objects.filter(
                email__iexact=request.user.email, status="PENDING"
            )
            .select_related("workspace", "invited_by")
            .order_by("-created_at")
        )
        return Response(InvitationSerializer(invitations, many=True).data)

    @extend_schema(
        tags=["Invitations"],
        operation_id="invitations_respond",
        summary="Accept or Reject Invitation",
        request=InvitationRespondSerializer,
        responses={200: InvitationSerializer},
    )
    def respond(self, request, token=None):
        serializer = InvitationRespondSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        invitation = InvitationService.respond(
            request.user, token, serializer.validated_data["accept"]
        )

        LoggerService.log_info(
            action="invitation_responded",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "invitation_id": str(invitation.id),
                "status": invitation.status,
            },
        )
        return Response(InvitationSerializer(invitation).data)

    @extend_schema(
        tags=["Invitations"],
        operation_id="invitations_cancel",
        summary="Cancel Invitation",
        description="Workspace owner, an ADMIN, or the sender.",
    )
    def destroy(self, request, pk=None):
        invitation = get_object_or_404(
            Invitation.objects.select_related("workspace"), pk=pk
        )
        InvitationService.cancel(request.user, invitation)

        LoggerService.log_info(
            action="invitation_cancelled",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={"invitation_id": str(pk)},
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
