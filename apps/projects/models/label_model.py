import uuid

from django.core.validators import RegexValidator
from django.db import models

COLOR_VALIDATOR = RegexValidator(
    regex=r"^#[0-9A-Fa-f]{6}$", message="Color must be a hex value like #1E88E5"
)


class Label(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        "projects.Project", on_delete=models.CASCADE, related_name="labels"
    )
    name = models.CharField(max_length=50)
    color = models.CharField(max_length=7, default="#6B7280", validators=[COLOR_VALIDATOR])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "labels"
        verbose_name = "Label"
        verbose_name_plural = "Labels"
        unique_together = ["project", "name"]
        ordering = ["name"]

    def __str__(self):
        return f"{self.project.key}: {self.name}"


class IssueLabel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    issue = models.ForeignKey(
        "projects.Issue", on_delete=models.CASCADE, related_name="issue_labels"
    )
    label = models.ForeignKey(
        "projects.Label", on_delete=models.CASCADE, related_name="issue_labels"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "issue_labels"
        unique_together = ["issue", "label"]

    def __str__(self):
        return f"{self.issue.key} <- {self.label.name}"
