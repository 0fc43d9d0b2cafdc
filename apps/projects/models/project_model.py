import uuid

from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models

PROJECT_KEY_VALIDATOR = RegexValidator(
    regex=r"^[A-Z][A-Z0-9]*$",
    message="Key must start with a letter and contain only uppercase letters and numbers",
)


class Project(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    workspace = models.ForeignKey(
        "workspaces.Workspace", on_delete=models.CASCADE, related_name="projects"
    )
    name = models.CharField(max_length=100)
    key = models.CharField(max_length=10, validators=[PROJECT_KEY_VALIDATOR])
    description = models.TextField(blank=True)
    lead = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="led_projects",
    )
    # Last issue number handed out; issue keys are "<key>-<n>"
    issue_counter = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "projects"
        verbose_name = "Project"
        verbose_name_plural = "Projects"
        unique_together = ["workspace", "key"]
        ordering = ["name"]
        indexes = [
            models.Index(fields=["workspace", "key"]),
        ]

    def __str__(self):
        return f"{self.key} - {self.name}"

    @property
    def issue_count(self) -> int:
        return self.issues.count()
