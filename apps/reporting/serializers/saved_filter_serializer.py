from rest_framework import serializers

from apps.projects.models import Issue
from apps.reporting.models import SavedFilter


class FilterCriteriaSerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ListField(
        child=serializers.ChoiceField(choices=Issue.STATUS_CHOICES), required=False
    )
    priority = serializers.ListField(
        child=serializers.ChoiceField(choices=Issue.PRIORITY_CHOICES), required=False
    )
    type = serializers.ListField(
        child=serializers.ChoiceField(choices=Issue.TYPE_CHOICES), required=False
    )
    assignee_ids = serializers.ListField(child=serializers.UUIDField(), required=False)
    label_ids = serializers.ListField(child=serializers.UUIDField(), required=False)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        # Stored as JSON, so UUIDs go back to strings
        for key in ("assignee_ids", "label_ids"):
            if key in value:
                value[key] = [str(item) for item in value[key]]
        return value


class SavedFilterSerializer(serializers.ModelSerializer):
    formatted_criteria = serializers.CharField(read_only=True)

    class Meta:
        model = SavedFilter
        fields = [
            "id",
            "name",
            "user",
            "project",
            "criteria",
            "is_default",
            "formatted_criteria",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SavedFilterCreateSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    name = serializers.CharField(min_length=1, max_length=50)
    criteria = FilterCriteriaSerializer(required=False)
    is_default = serializers.BooleanField(default=False)


class SavedFilterUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=50, required=False)
    criteria = FilterCriteriaSerializer(required=False)
    is_default = serializers.BooleanField(required=False)
