from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F, Max

from rest_framework.exceptions import NotFound, ValidationError

from apps.projects.models import Issue, Label, Project
from apps.projects.services.issue_key_generator import IssueKeyGenerator
from apps.projects.signals import build_issue_event, emit_issue_event, issue_deleted
from apps.workspaces.services import ensure_workspace_access, has_workspace_access

User = get_user_model()

# Plain fields copied straight from validated input on update
SIMPLE_FIELDS = ["title", "description", "type", "priority", "due_date"]


class IssueService:
    """
    Issue store: creation, partial update, move and deletion of issues.

    Positions: ``order`` is unique inside a (project, status) group. New
    issues and issues moved without an explicit order go to the end of
    their group; an explicit order that is already taken pushes the
    holder and every later issue of the group down by one. The project
    row is locked while a position is computed.
    """

    @staticmethod
    def get_project(project_id):
        try:
            return Project.objects.select_related("workspace").get(pk=project_id)
        except Project.DoesNotExist:
            raise NotFound("Project not found")

    @staticmethod
    def get_issue(issue_id):
        try:
            return Issue.objects.select_related("project__workspace").get(pk=issue_id)
        except Issue.DoesNotExist:
            raise NotFound("Issue not found")

    @staticmethod
    def lock_project(project_id):
        Project.objects.select_for_update().filter(pk=project_id).first()

    @staticmethod
    def next_order(project_id, status, exclude_id=None) -> int:
        group = Issue.objects.filter(project_id=project_id, status=status)
        if exclude_id is not None:
            group = group.exclude(pk=exclude_id)
        current = group.aggregate(max_order=Max("order"))["max_order"]
        return (current if current is not None else 0) + 1

    @staticmethod
    def make_room(project_id, status, order, exclude_id=None):
        """Free ``order`` in the group by shifting the holder and later issues."""
        group = Issue.objects.filter(project_id=project_id, status=status)
        if exclude_id is not None:
            group = group.exclude(pk=exclude_id)
        if group.filter(order=order).exists():
            group.filter(order__gte=order).update(order=F("order") + 1)

    @staticmethod
    def resolve_assignee(project, assignee_id):
        if assignee_id is None:
            return None
        assignee = User.objects.filter(pk=assignee_id, is_active=True).first()
        if assignee is None or not has_workspace_access(assignee, project.workspace):
            raise ValidationError(
                {"assignee_id": ["Assignee must be a member of this workspace"]}
            )
        return assignee

    @staticmethod
    def resolve_parent(project, parent_id, issue=None):
        if parent_id is None:
            return None
        parent = Issue.objects.filter(pk=parent_id).first()
        if parent is None:
            raise NotFound("Parent issue not found")
        if parent.project_id != project.id:
            raise ValidationError(
                {"parent_id": ["Parent issue must belong to the same project"]}
            )
        if issue is not None and parent.id == issue.id:
            raise ValidationError({"parent_id": ["An issue cannot be its own parent"]})
        if parent.parent_id is not None:
            raise ValidationError({"parent_id": ["Cannot create subtask of a subtask"]})
        if issue is not None and issue.subtasks.exists():
            raise ValidationError(
                {"parent_id": ["An issue with subtasks cannot become a subtask"]}
            )
        return parent

    @staticmethod
    def resolve_labels(project, label_ids):
        if not label_ids:
            return []
        wanted = set(label_ids)
        labels = list(Label.objects.filter(project=project, pk__in=wanted))
        if len(labels) != len(wanted):
            raise ValidationError(
                {"label_ids": ["All labels must belong to the issue's project"]}
            )
        return labels

    @classmethod
    @transaction.atomic
    def create_issue(cls, user, data) -> Issue:
        project = cls.get_project(data["project_id"])
        ensure_workspace_access(user, project.workspace)

        assignee = cls.resolve_assignee(project, data.get("assignee_id"))
        parent = cls.resolve_parent(project, data.get("parent_id"))
        labels = cls.resolve_labels(project, data.get("label_ids"))

        status = data.get("status") or "BACKLOG"
        # Key generation locks the project row for the rest of the transaction
        key = IssueKeyGenerator.generate_key(project)
        issue = Issue.objects.create(
            project=project,
            key=key,
            title=data["title"],
            description=data.get("description") or "",
            type=data.get("type") or "TASK",
            priority=data.get("priority") or "MEDIUM",
            status=status,
            order=cls.next_order(project.id, status),
            assignee=assignee,
            reporter=user,
            parent=parent,
            due_date=data.get("due_date"),
        )
        if labels:
            issue.labels.set(labels)

        emit_issue_event("issue_created", issue, user)
        return issue

    @classmethod
    def create_subtask(cls, user, parent, data) -> Issue:
        if parent.parent_id is not None:
            raise ValidationError("Cannot create subtask of a subtask")
        payload = dict(data, project_id=parent.project_id, parent_id=parent.id)
        return cls.create_issue(user, payload)

    @staticmethod
    def list_subtasks(user, issue):
        ensure_workspace_access(user, issue.project.workspace)
        return issue.subtasks.select_related("assignee").order_by("order", "id")

    @classmethod
    @transaction.atomic
    def update_issue(cls, user, issue, data) -> Issue:
        project = issue.project
        ensure_workspace_access(user, project.workspace)

        # Resolve every reference before touching the instance
        if "assignee_id" in data:
            assignee = cls.resolve_assignee(project, data["assignee_id"])
        if "parent_id" in data:
            parent = cls.resolve_parent(project, data["parent_id"], issue=issue)
        if "label_ids" in data:
            labels = cls.resolve_labels(project, data["label_ids"])

        changes = {}
        for field in SIMPLE_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if field == "description" and value is None:
                value = ""
            if getattr(issue, field) != value:
                changes[field] = (getattr(issue, field), value)
                setattr(issue, field, value)

        if "assignee_id" in data and issue.assignee_id != (assignee and assignee.id):
            changes["assignee_id"] = (issue.assignee_id, assignee and assignee.id)
            issue.assignee = assignee

        if "parent_id" in data and issue.parent_id != (parent and parent.id):
            changes["parent_id"] = (issue.parent_id, parent and parent.id)
            issue.parent = parent

        if "status" in data or data.get("order") is not None:
            cls._position(
                issue, data.get("status") or issue.status, data.get("order"), changes
            )

        issue.save()

        if "label_ids" in data:
            before = set(issue.labels.values_list("id", flat=True))
            after = {label.id for label in labels}
            if before != after:
                issue.labels.set(labels)
                changes["label_ids"] = (before, after)

        if changes:
            emit_issue_event("issue_updated", issue, user, changes)
        return issue

    @classmethod
    def _position(cls, issue, status, order, changes):
        old_status, old_order = issue.status, issue.order
        if order is None and status == old_status:
            return
        if order is not None and status == old_status and order == old_order:
            return

        cls.lock_project(issue.project_id)
        if order is None:
            order = cls.next_order(issue.project_id, status, exclude_id=issue.id)
        else:
            cls.make_room(issue.project_id, status, order, exclude_id=issue.id)

        issue.status = status
        issue.order = order
        if status != old_status:
            changes["status"] = (old_status, status)
        changes["order"] = (old_order, order)

    @classmethod
    def move_issue(cls, user, issue, status, order=None) -> Issue:
        data = {"status": status}
        if order is not None:
            data["order"] = order
        return cls.update_issue(user, issue, data)

    @staticmethod
    @transaction.atomic
    def delete_issue(user, issue):
        ensure_workspace_access(user, issue.project.workspace)
        event = build_issue_event("issue_deleted", issue, user)
        issue.delete()
        issue_deleted.send(sender=Issue, issue=issue, actor=user, event=event)
        return event
