import uuid

from django.conf import settings
from django.db import models


class IssueLink(models.Model):
    LINK_TYPE_CHOICES = [
        ("BLOCKS", "Blocks"),
        ("IS_BLOCKED_BY", "Is blocked by"),
        ("RELATES_TO", "Relates to"),
        ("DUPLICATES", "Duplicates"),
        ("IS_DUPLICATED_BY", "Is duplicated by"),
    ]

    RECIPROCAL_LINKS = {
        "BLOCKS": "IS_BLOCKED_BY",
        "IS_BLOCKED_BY": "BLOCKS",
        "DUPLICATES": "IS_DUPLICATED_BY",
        "IS_DUPLICATED_BY": "DUPLICATES",
        "RELATES_TO": "RELATES_TO",
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    source_issue = models.ForeignKey(
        "projects.Issue", on_delete=models.CASCADE, related_name="source_links"
    )
    target_issue = models.ForeignKey(
        "projects.Issue", on_delete=models.CASCADE, related_name="target_links"
    )
    link_type = models.CharField(max_length=20, choices=LINK_TYPE_CHOICES)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="created_issue_links",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "issue_links"
        verbose_name = "Issue Link"
        verbose_name_plural = "Issue Links"
        unique_together = ["source_issue", "target_issue", "link_type"]
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["source_issue"]),
            models.Index(fields=["target_issue"]),
        ]

    def __str__(self):
        return f"{self.source_issue.key} {self.link_type} {self.target_issue.key}"

    @classmethod
    def get_reciprocal_link_type(cls, link_type):
        return cls.RECIPROCAL_LINKS.get(link_type, link_type)
