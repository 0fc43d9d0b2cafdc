from rest_framework import serializers

from apps.projects.models import Issue
from apps.projects.services import BULK_ACTIONS
from base.exceptions import InvalidAction


class BulkStatusPayloadSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Issue.STATUS_CHOICES)


class BulkAssignPayloadSerializer(serializers.Serializer):
    # Required key; null unassigns
    assignee_id = serializers.UUIDField(allow_null=True)


class BulkPriorityPayloadSerializer(serializers.Serializer):
    priority = serializers.ChoiceField(choices=Issue.PRIORITY_CHOICES)


class BulkDeletePayloadSerializer(serializers.Serializer):
    pass


BULK_PAYLOAD_SERIALIZERS = {
    "updateStatus": BulkStatusPayloadSerializer,
    "assign": BulkAssignPayloadSerializer,
    "updatePriority": BulkPriorityPayloadSerializer,
    "delete": BulkDeletePayloadSerializer,
}


class BulkIssueActionSerializer(serializers.Serializer):
    """
    Body of ``POST /projects/issues/bulk/``. ``action`` selects which
    payload keys are required next to ``issue_ids``::

        {"action": "updateStatus", "issue_ids": [...], "status": "DONE"}
        {"action": "assign", "issue_ids": [...], "assignee_id": null}
        {"action": "updatePriority", "issue_ids": [...], "priority": "HIGH"}
        {"action": "delete", "issue_ids": [...]}
    """

    action = serializers.CharField()
    issue_ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=False,
        error_messages={"empty": "At least one issue is required"},
    )

    def validate_action(self, value):
        if value not in BULK_ACTIONS:
            raise InvalidAction(
                f"Unknown action: {value}. Valid actions: {', '.join(BULK_ACTIONS)}"
            )
        return value

    def validate(self, attrs):
        payload_serializer = BULK_PAYLOAD_SERIALIZERS[attrs["action"]](
            data=self.initial_data
        )
        payload_serializer.is_valid(raise_exception=True)
        attrs["payload"] = dict(payload_serializer.validated_data)
        return attrs
