"""
Workspace invitation lifecycle: invite, respond (accept/reject), cancel.
"""

import logging

from django.db import transaction
from django.utils import timezone

from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from apps.notifications.services import NotificationService
from apps.workspaces.models import Invitation, WorkspaceMember
from apps.workspaces.services.access_guard import (
    ensure_workspace_admin,
    is_workspace_admin,
)

logger = logging.getLogger(__name__)


class InvitationService:
    @staticmethod
    @transaction.atomic
    def invite(user, workspace, email, role="DEVELOPER"):
        ensure_workspace_admin(
            user, workspace, "You don't have permission to invite members"
        )
        email = email.lower()

        if WorkspaceMember.objects.filter(
            workspace=workspace, user__email__iexact=email
        ).exists():
            raise ValidationError("User is already a member of this workspace")

        if Invitation.objects.filter(
            workspace=workspace, email__iexact=email, status="PENDING"
        ).exists():
            raise ValidationError("An invitation has already been sent to this email")

        invitation = Invitation.objects.create(
            workspace=workspace, email=email, role=role, invited_by=user
        )

        NotificationService().notify_invitation_received(invitation)

        logger.info(f"Invitation {invitation.id} sent to {email} for {workspace.slug}")
        return invitation

    @staticmethod
    def respond(user, token, accept):
        try:
            invitation = Invitation.objects.select_related("workspace").get(token=token)
        except Invitation.DoesNotExist:
            raise NotFound("Invitation not found")

        if invitation.status != "PENDING":
            raise ValidationError("This invitation is no longer valid")

        if invitation.is_expired:
            invitation.status = "EXPIRED"
            invitation.save(update_fields=["status"])
            raise ValidationError("This invitation has expired")

        if invitation.email.lower() != (user.email or "").lower():
            raise PermissionDenied(
                "This invitation was sent to a different email address"
            )

        with transaction.atomic():
            if accept:
                WorkspaceMember.objects.get_or_create(
                    workspace=invitation.workspace,
                    user=user,
                    defaults={"role": invitation.role},
                )
                invitation.status = "ACCEPTED"
            else:
                invitation.status = "REJECTED"
            invitation.responded_at = timezone.now()
            invitation.save(update_fields=["status", "responded_at"])

        return invitation

    @staticmethod
    @transaction.atomic
    def cancel(user, invitation):
        is_sender = invitation.invited_by_id == user.id
        if not is_sender and not is_workspace_admin(user, invitation.workspace):
            raise PermissionDenied(
                "You don't have permission to cancel this invitation"
            )
        if invitation.status != "PENDING":
            raise ValidationError("Only pending invitations can be cancelled")
        invitation.delete()
