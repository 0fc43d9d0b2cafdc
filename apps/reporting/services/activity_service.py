import logging

from apps.reporting.models import ActivityLog

logger = logging.getLogger(__name__)

# Issue fields whose changes get their own activity action
FIELD_ACTIONS = {
    "status": "ISSUE_STATUS_CHANGED",
    "assignee_id": "ISSUE_ASSIGNED",
    "priority": "ISSUE_PRIORITY_CHANGED",
}

# Position changes are board housekeeping, not history
IGNORED_FIELDS = {"order"}


class ActivityService:
    @staticmethod
    def log_activity(issue, user, action, field=None, old_value=None, new_value=None):
        metadata = {}
        if field is not None:
            metadata = {"field": field, "old_value": old_value, "new_value": new_value}
        return ActivityLog.objects.create(
            issue=issue, user=user, action=action, metadata=metadata
        )

    @classmethod
    def log_issue_event(cls, issue, user, event):
        """
        Turn an issue domain event into activity rows: one row for a
        creation, one row per changed field for an update.
        """
        if event["type"] == "issue_created":
            return [cls.log_activity(issue, user, "ISSUE_CREATED")]

        entries = []
        for field, (old_value, new_value) in event["changes"].items():
            if field in IGNORED_FIELDS:
                continue
            action = FIELD_ACTIONS.get(field, "ISSUE_UPDATED")
            entries.append(
                cls.log_activity(issue, user, action, field, old_value, new_value)
            )
        logger.debug(f"Recorded {len(entries)} activity entries for {issue.key}")
        return entries

    @staticmethod
    def activities_for_issue(issue):
        return (
            ActivityLog.objects.filter(issue=issue)
            .select_related("user")
            .order_by("-created_at")
        )
