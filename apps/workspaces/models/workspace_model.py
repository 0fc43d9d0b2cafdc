import re
import uuid

from django.conf import settings
from django.db import models

SLUG_RE = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    return SLUG_RE.sub("-", name.lower()).strip("-")


class Workspace(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=50)
    slug = models.SlugField(max_length=50, unique=True)
    description = models.TextField(blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="owned_workspaces",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "workspaces"
        verbose_name = "Workspace"
        verbose_name_plural = "Workspaces"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def member_count(self) -> int:
        return self.members.count()

    @property
    def project_count(self) -> int:
        return self.projects.count()
