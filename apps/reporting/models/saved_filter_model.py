import uuid

from django.conf import settings
from django.db import models


class SavedFilter(models.Model):
    CRITERIA_KEYS = ["search", "status", "priority", "type", "assignee_ids", "label_ids"]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=50)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="saved_filters",
    )
    project = models.ForeignKey(
        "projects.Project", on_delete=models.CASCADE, related_name="saved_filters"
    )
    criteria = models.JSONField(default=dict, blank=True)
    is_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "saved_filters"
        verbose_name = "Saved Filter"
        verbose_name_plural = "Saved Filters"
        unique_together = ["user", "project", "name"]
        ordering = ["-is_default", "name"]
        indexes = [
            models.Index(fields=["user", "project"]),
        ]

    def __str__(self):
        return f"{self.name} ({self.user.email})"

    @property
    def formatted_criteria(self):
        active = {key: value for key, value in self.criteria.items() if value}
        if not active:
            return "No filters"
        return ", ".join(f"{key}={value}" for key, value in active.items())
