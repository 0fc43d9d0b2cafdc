import uuid

from django.conf import settings
from django.db import models


class IssueComment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    issue = models.ForeignKey(
        "projects.Issue", on_delete=models.CASCADE, related_name="comments"
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="issue_comments",
    )
    content = models.TextField()
    is_edited = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "issue_comments"
        verbose_name = "Issue Comment"
        verbose_name_plural = "Issue Comments"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["issue", "created_at"]),
        ]

    def __str__(self):
        return f"Comment on {self.issue.key} by {self.author.email}"

    def can_edit(self, user):
        return self.author_id == user.id

    def can_delete(self, user):
        from apps.workspaces.services import is_workspace_admin

        if self.author_id == user.id:
            return True
        return is_workspace_admin(user, self.issue.project.workspace)
