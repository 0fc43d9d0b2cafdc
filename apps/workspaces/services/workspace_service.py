import logging

from django.db import transaction

from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from apps.workspaces.models import Workspace, WorkspaceMember, generate_slug
from apps.workspaces.services.access_guard import ensure_workspace_admin
from base.exceptions import Conflict

logger = logging.getLogger(__name__)

SLUG_TAKEN_MESSAGE = "A workspace with this URL already exists"


class WorkspaceService:
    @staticmethod
    def _ensure_slug_available(slug, exclude_id=None):
        queryset = Workspace.objects.filter(slug=slug)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        if queryset.exists():
            raise Conflict(SLUG_TAKEN_MESSAGE)

    @staticmethod
    @transaction.atomic
    def create_workspace(user, name, slug=None, description=""):
        """Create a workspace owned by ``user``, who also joins as ADMIN."""
        slug = slug or generate_slug(name)
        if not slug:
            raise ValidationError({"slug": ["Slug could not be generated from name"]})
        WorkspaceService._ensure_slug_available(slug)

        workspace = Workspace.objects.create(
            name=name, slug=slug, description=description, owner=user
        )
        WorkspaceMember.objects.create(workspace=workspace, user=user, role="ADMIN")

        logger.info(f"Workspace {workspace.slug} created by {user.email}")
        return workspace

    @staticmethod
    @transaction.atomic
    def update_workspace(user, workspace, **changes):
        ensure_workspace_admin(
            user, workspace, "You don't have permission to update this workspace"
        )
        slug = changes.get("slug")
        if slug and slug != workspace.slug:
            WorkspaceService._ensure_slug_available(slug, exclude_id=workspace.id)

        for field, value in changes.items():
            setattr(workspace, field, value)
        workspace.save()
        return workspace

    @staticmethod
    def _get_member(workspace, user_id):
        try:
            return WorkspaceMember.objects.select_related("user").get(
                workspace=workspace, user_id=user_id
            )
        except WorkspaceMember.DoesNotExist:
            raise NotFound("Member not found")

    @staticmethod
    @transaction.atomic
    def remove_member(user, workspace, member_user_id):
        ensure_workspace_admin(
            user, workspace, "You don't have permission to remove members"
        )
        member = WorkspaceService._get_member(workspace, member_user_id)
        if member.user_id == workspace.owner_id:
            raise ValidationError("Cannot remove the workspace owner")
        member.delete()
        return member

    @staticmethod
    @transaction.atomic
    def change_member_role(user, workspace, member_user_id, role):
        ensure_workspace_admin(
            user, workspace, "You don't have permission to change member roles"
        )
        member = WorkspaceService._get_member(workspace, member_user_id)
        if member.user_id == workspace.owner_id:
            raise PermissionDenied("The workspace owner's role cannot be changed")
        member.role = role
        member.save(update_fields=["role", "updated_at"])
        return member
