import uuid

from django.conf import settings
from django.db import models


class WorkspaceMember(models.Model):
    ROLE_CHOICES = [
        ("ADMIN", "Administrator"),
        ("DEVELOPER", "Developer"),
        ("TESTER", "Tester"),
        ("GUEST", "Guest"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    workspace = models.ForeignKey(
        "workspaces.Workspace", on_delete=models.CASCADE, related_name="members"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="workspace_memberships",
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="DEVELOPER")
    joined_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "workspace_members"
        verbose_name = "Workspace Member"
        verbose_name_plural = "Workspace Members"
        unique_together = ["workspace", "user"]
        ordering = ["joined_at"]

    def __str__(self):
        return f"{self.user.email} - {self.workspace.name} ({self.role})"

    @property
    def is_admin(self):
        return self.role == "ADMIN"
