import logging

from django.db import transaction
from django.db.models import Max

from rest_framework.exceptions import NotFound, ValidationError

from apps.projects.models import Issue
from apps.projects.services.issue_service import IssueService
from apps.projects.signals import build_issue_event, emit_issue_event, issue_deleted
from apps.workspaces.services import ensure_workspace_access
from base.exceptions import InvalidAction, MixedProjectBatch

logger = logging.getLogger(__name__)

BULK_ACTIONS = ["updateStatus", "assign", "updatePriority", "delete"]


class BulkMutator:
    """
    Apply one action to a batch of issues as a single transaction.

    Every id must exist and every issue must live in the same project.
    Access is checked once per workspace before anything is written, and
    any failure rolls the whole batch back.
    """

    @classmethod
    def apply_bulk(cls, user, action, issue_ids, payload=None):
        if action not in BULK_ACTIONS:
            raise InvalidAction(
                f"Unknown action: {action}. Valid actions: {', '.join(BULK_ACTIONS)}"
            )
        payload = payload or {}
        ids = list(dict.fromkeys(str(issue_id) for issue_id in issue_ids))
        if not ids:
            raise ValidationError("At least one issue is required")

        with transaction.atomic():
            issues = list(
                Issue.objects.select_for_update()
                .filter(pk__in=ids)
                .select_related("project__workspace")
                .order_by("order", "id")
            )
            if len(issues) != len(ids):
                raise NotFound("One or more issues were not found")

            if len({issue.project_id for issue in issues}) > 1:
                raise MixedProjectBatch()

            workspaces = {
                issue.project.workspace_id: issue.project.workspace for issue in issues
            }
            for workspace in workspaces.values():
                ensure_workspace_access(user, workspace)

            handler = getattr(cls, f"_apply_{action.lower()}")
            handler(user, issues, payload)

        logger.info("Bulk %s applied to %d issues", action, len(issues))
        return {"action": action, "count": len(issues), "issue_ids": ids}

    @staticmethod
    def _apply_updatestatus(user, issues, payload):
        status = payload["status"]
        project_id = issues[0].project_id
        IssueService.lock_project(project_id)
        current = (
            Issue.objects.filter(project_id=project_id, status=status)
            .aggregate(max_order=Max("order"))["max_order"]
        )
        next_order = (current if current is not None else 0) + 1

        # Issues already in the target column keep their position
        for issue in issues:
            if issue.status == status:
                continue
            changes = {
                "status": (issue.status, status),
                "order": (issue.order, next_order),
            }
            issue.status = status
            issue.order = next_order
            next_order += 1
            issue.save(update_fields=["status", "order", "updated_at"])
            emit_issue_event("issue_updated", issue, user, changes)

    @staticmethod
    def _apply_assign(user, issues, payload):
        project = issues[0].project
        assignee = IssueService.resolve_assignee(project, payload.get("assignee_id"))
        assignee_id = assignee.id if assignee else None

        for issue in issues:
            if issue.assignee_id == assignee_id:
                continue
            changes = {"assignee_id": (issue.assignee_id, assignee_id)}
            issue.assignee = assignee
            issue.save(update_fields=["assignee", "updated_at"])
            emit_issue_event("issue_updated", issue, user, changes)

    @staticmethod
    def _apply_updatepriority(user, issues, payload):
        priority = payload["priority"]
        for issue in issues:
            if issue.priority == priority:
                continue
            changes = {"priority": (issue.priority, priority)}
            issue.priority = priority
            issue.save(update_fields=["priority", "updated_at"])
            emit_issue_event("issue_updated", issue, user, changes)

    @staticmethod
    def _apply_delete(user, issues, payload):
        events = [
            (issue, build_issue_event("issue_deleted", issue, user)) for issue in issues
        ]
        Issue.objects.filter(pk__in=[issue.pk for issue in issues]).delete()
        for issue, event in events:
            issue_deleted.send(sender=Issue, issue=issue, actor=user, event=event)
