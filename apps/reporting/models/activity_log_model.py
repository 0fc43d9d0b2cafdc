import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class ActivityLog(models.Model):
    ACTION_CHOICES = [
        ("ISSUE_CREATED", "Issue created"),
        ("ISSUE_UPDATED", "Issue updated"),
        ("ISSUE_STATUS_CHANGED", "Status changed"),
        ("ISSUE_ASSIGNED", "Issue assigned"),
        ("ISSUE_PRIORITY_CHANGED", "Priority changed"),
        ("COMMENT_ADDED", "Comment added"),
        ("COMMENT_UPDATED", "Comment updated"),
        ("COMMENT_DELETED", "Comment deleted"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    issue = models.ForeignKey(
        "projects.Issue", on_delete=models.CASCADE, related_name="activities"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activity_logs",
    )
    action = models.CharField(max_length=30, choices=ACTION_CHOICES)
    # {"field": ..., "old_value": ..., "new_value": ...}
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "activity_logs"
        verbose_name = "Activity Log"
        verbose_name_plural = "Activity Logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["issue", "created_at"]),
            models.Index(fields=["user", "created_at"]),
        ]

    def __str__(self):
        return f"{self.user.email} {self.action} {self.issue.key}"

    @property
    def time_ago(self):
        diff = timezone.now() - self.created_at

        if diff.days > 365:
            years = diff.days // 365
            return f"{years} year{'s' if years > 1 else ''} ago"
        elif diff.days > 30:
            months = diff.days // 30
            return f"{months} month{'s' if months > 1 else ''} ago"
        elif diff.days > 0:
            return f"{diff.days} day{'s' if diff.days > 1 else ''} ago"
        elif diff.seconds > 3600:
            hours = diff.seconds // 3600
            return f"{hours} hour{'s' if hours > 1 else ''} ago"
        elif diff.seconds > 60:
            minutes = diff.seconds // 60
            return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
        return "just now"
