from rest_framework import serializers

from apps.projects.models import Project
from apps.projects.models.project_model import PROJECT_KEY_VALIDATOR
from base.serializers import UserBasicSerializer, WorkspaceBasicSerializer


class ProjectSerializer(serializers.ModelSerializer):
    """
    Read shape of a project. ``workspace`` is the workspace UUID; the
    nested ``workspace_details`` carries its name and slug.
    """

    workspace_details = WorkspaceBasicSerializer(source="workspace", read_only=True)
    lead = UserBasicSerializer(read_only=True)
    issue_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Project
        fields = [
            "id",
            "workspace",
            "workspace_details",
            "name",
            "key",
            "description",
            "lead",
            "issue_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProjectCreateSerializer(serializers.Serializer):
    workspace_id = serializers.UUIDField()
    name = serializers.CharField(min_length=2, max_length=100)
    key = serializers.CharField(min_length=2, max_length=10)
    description = serializers.CharField(
        max_length=10000, required=False, allow_blank=True, default=""
    )

    def validate_name(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError("Name must be at least 2 characters")
        return value

    def validate_key(self, value):
        value = value.strip().upper()
        PROJECT_KEY_VALIDATOR(value)
        return value


class ProjectUpdateSerializer(ProjectCreateSerializer):
    workspace_id = None
    lead_id = serializers.UUIDField(required=False, allow_null=True)

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("partial", True)
        super().__init__(*args, **kwargs)
