import uuid

from django.conf import settings
from django.db import models


class Issue(models.Model):
    TYPE_CHOICES = [
        ("EPIC", "Epic"),
        ("STORY", "Story"),
        ("TASK", "Task"),
        ("BUG", "Bug"),
    ]

    # Declaration order is the board column order
    STATUS_CHOICES = [
        ("BACKLOG", "Backlog"),
        ("TODO", "To Do"),
        ("IN_PROGRESS", "In Progress"),
        ("IN_REVIEW", "In Review"),
        ("DONE", "Done"),
        ("CANCELLED", "Cancelled"),
    ]

    PRIORITY_CHOICES = [
        ("URGENT", "Urgent"),
        ("HIGH", "High"),
        ("MEDIUM", "Medium"),
        ("LOW", "Low"),
        ("NONE", "No priority"),
    ]

    SUBTASK_TYPES = ["TASK", "BUG"]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        "projects.Project", on_delete=models.CASCADE, related_name="issues"
    )
    key = models.CharField(max_length=20)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default="TASK")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="BACKLOG")
    priority = models.CharField(
        max_length=10, choices=PRIORITY_CHOICES, default="MEDIUM"
    )
    # Position within the (project, status) group
    order = models.IntegerField(default=0)
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_issues",
    )
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reported_issues",
    )
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="subtasks",
    )
    labels = models.ManyToManyField(
        "projects.Label", through="projects.IssueLabel", related_name="issues"
    )
    due_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "issues"
        verbose_name = "Issue"
        verbose_name_plural = "Issues"
        unique_together = ["project", "key"]
        ordering = ["order", "id"]
        indexes = [
            models.Index(fields=["project", "status", "order"]),
            models.Index(fields=["project", "created_at"]),
            models.Index(fields=["assignee"]),
            models.Index(fields=["parent"]),
        ]

    def __str__(self):
        return f"{self.key} - {self.title}"

    @property
    def is_subtask(self):
        return self.parent_id is not None

    @property
    def workspace(self):
        return self.project.workspace

    @property
    def comment_count(self):
        return self.comments.count()

    @property
    def subtask_count(self):
        return self.subtasks.count()
