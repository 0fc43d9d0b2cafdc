from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from apps.projects.models import Issue, Label
from base.serializers import (
    IssueBasicSerializer,
    ProjectBasicSerializer,
    UserBasicSerializer,
)


class IssueLabelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Label
        fields = ["id", "name", "color"]
        read_only_fields = fields


class IssueListSerializer(serializers.ModelSerializer):
    assignee = UserBasicSerializer(read_only=True)
    reporter = UserBasicSerializer(read_only=True)
    labels = IssueLabelSerializer(many=True, read_only=True)

    class Meta:
        model = Issue
        fields = [
            "id",
            "key",
            "title",
            "type",
            "status",
            "priority",
            "order",
            "project",
            "parent",
            "assignee",
            "reporter",
            "labels",
            "due_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class IssueDetailSerializer(IssueListSerializer):
    project = ProjectBasicSerializer(read_only=True)
    parent = IssueBasicSerializer(read_only=True)
    subtasks = serializers.SerializerMethodField()
    comment_count = serializers.ReadOnlyField()
    subtask_count = serializers.ReadOnlyField()

    class Meta(IssueListSerializer.Meta):
        fields = IssueListSerializer.Meta.fields + [
            "description",
            "subtasks",
            "subtask_count",
            "comment_count",
        ]
        read_only_fields = fields

    @extend_schema_field(IssueBasicSerializer(many=True))
    def get_subtasks(self, obj):
        return IssueBasicSerializer(obj.subtasks.order_by("order", "id"), many=True).data


class IssueCreateSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(
        max_length=10000, required=False, allow_blank=True
    )
    type = serializers.ChoiceField(choices=Issue.TYPE_CHOICES, default="TASK")
    priority = serializers.ChoiceField(choices=Issue.PRIORITY_CHOICES, default="MEDIUM")
    status = serializers.ChoiceField(choices=Issue.STATUS_CHOICES, required=False)
    assignee_id = serializers.UUIDField(required=False, allow_null=True)
    parent_id = serializers.UUIDField(required=False, allow_null=True)
    label_ids = serializers.ListField(child=serializers.UUIDField(), required=False)
    due_date = serializers.DateField(required=False, allow_null=True)


class IssueUpdateSerializer(serializers.Serializer):
    """Partial update. Only the keys present in the body are applied."""

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(
        max_length=10000, required=False, allow_blank=True, allow_null=True
    )
    type = serializers.ChoiceField(choices=Issue.TYPE_CHOICES, required=False)
    status = serializers.ChoiceField(choices=Issue.STATUS_CHOICES, required=False)
    priority = serializers.ChoiceField(choices=Issue.PRIORITY_CHOICES, required=False)
    order = serializers.IntegerField(min_value=0, required=False)
    assignee_id = serializers.UUIDField(required=False, allow_null=True)
    parent_id = serializers.UUIDField(required=False, allow_null=True)
    label_ids = serializers.ListField(child=serializers.UUIDField(), required=False)
    due_date = serializers.DateField(required=False, allow_null=True)


class IssueMoveSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Issue.STATUS_CHOICES)
    order = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class SubtaskCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(
        max_length=10000, required=False, allow_blank=True
    )
    type = serializers.ChoiceField(
        choices=Issue.SUBTASK_TYPES,
        default="TASK",
        error_messages={"invalid_choice": "Subtasks can only be TASK or BUG"},
    )
    priority = serializers.ChoiceField(choices=Issue.PRIORITY_CHOICES, default="MEDIUM")
    assignee_id = serializers.UUIDField(required=False, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)


class BoardColumnSerializer(serializers.Serializer):
    status = serializers.CharField()
    name = serializers.CharField()
    issues = IssueListSerializer(many=True)
