"""
Shared serializers to avoid naming conflicts across apps.
"""
from rest_framework import serializers


class UserBasicSerializer(serializers.ModelSerializer):
    """Session-shaped user for nested representation: id, email, name, image."""

    class Meta:
        from apps.authentication.models import User

        model = User
        fields = ["id", "email", "name", "image"]
        read_only_fields = ["id", "email", "name", "image"]


class WorkspaceBasicSerializer(serializers.ModelSerializer):
    """Basic workspace info for nested representation across all apps."""

    class Meta:
        from apps.workspaces.models import Workspace

        model = Workspace
        fields = ["id", "name", "slug"]
        read_only_fields = ["id", "name", "slug"]


class ProjectBasicSerializer(serializers.ModelSerializer):
    """Basic project info for nested representation across all apps."""

    class Meta:
        from apps.projects.models import Project

        model = Project
        fields = ["id", "name", "key", "workspace"]
        read_only_fields = ["id", "name", "key", "workspace"]


class IssueBasicSerializer(serializers.ModelSerializer):
    """Basic issue info for links, subtasks and notifications."""

    class Meta:
        from apps.projects.models import Issue

        model = Issue
        fields = ["id", "key", "title", "status", "priority", "type"]
        read_only_fields = ["id", "key", "title", "status", "priority", "type"]
