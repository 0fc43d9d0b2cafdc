from django.db import transaction
from django.db.models import Q

from rest_framework.exceptions import NotFound

from apps.projects.models import Issue, Project
from apps.reporting.models import SavedFilter
from apps.workspaces.services import ensure_workspace_access
from base.exceptions import Conflict

DUPLICATE_NAME_MESSAGE = "A filter with this name already exists"


class SavedFilterService:
    @staticmethod
    def _unset_other_defaults(user, project, exclude_id=None):
        others = SavedFilter.objects.filter(user=user, project=project, is_default=True)
        if exclude_id is not None:
            others = others.exclude(pk=exclude_id)
        others.update(is_default=False)

    @staticmethod
    def _ensure_unique_name(user, project, name, exclude_id=None):
        duplicates = SavedFilter.objects.filter(user=user, project=project, name=name)
        if exclude_id is not None:
            duplicates = duplicates.exclude(pk=exclude_id)
        if duplicates.exists():
            raise Conflict(DUPLICATE_NAME_MESSAGE)

    @classmethod
    @transaction.atomic
    def create_filter(cls, user, data) -> SavedFilter:
        try:
            project = Project.objects.select_related("workspace").get(
                pk=data["project_id"]
            )
        except Project.DoesNotExist:
            raise NotFound("Project not found")
        ensure_workspace_access(user, project.workspace)

        cls._ensure_unique_name(user, project, data["name"])
        if data.get("is_default"):
            cls._unset_other_defaults(user, project)

        return SavedFilter.objects.create(
            user=user,
            project=project,
            name=data["name"],
            criteria=data.get("criteria") or {},
            is_default=data.get("is_default", False),
        )

    @classmethod
    @transaction.atomic
    def update_filter(cls, saved_filter, data) -> SavedFilter:
        if "name" in data:
            cls._ensure_unique_name(
                saved_filter.user, saved_filter.project, data["name"], saved_filter.id
            )
            saved_filter.name = data["name"]
        if "criteria" in data:
            saved_filter.criteria = data["criteria"]
        if "is_default" in data:
            if data["is_default"]:
                cls._unset_other_defaults(
                    saved_filter.user, saved_filter.project, saved_filter.id
                )
            saved_filter.is_default = data["is_default"]
        saved_filter.save()
        return saved_filter

    @staticmethod
    def get_default_filter(user, project):
        return SavedFilter.objects.filter(
            user=user, project=project, is_default=True
        ).first()

    @staticmethod
    def filter_issues(queryset, criteria):
        """Apply saved criteria to an issue queryset. Empty criteria match all."""
        search = (criteria.get("search") or "").strip()
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search)
                | Q(description__icontains=search)
                | Q(key__icontains=search)
            )
        if criteria.get("status"):
            queryset = queryset.filter(status__in=criteria["status"])
        if criteria.get("priority"):
            queryset = queryset.filter(priority__in=criteria["priority"])
        if criteria.get("type"):
            queryset = queryset.filter(type__in=criteria["type"])
        if criteria.get("assignee_ids"):
            queryset = queryset.filter(assignee_id__in=criteria["assignee_ids"])
        if criteria.get("label_ids"):
            queryset = queryset.filter(labels__id__in=criteria["label_ids"]).distinct()
        return queryset

    @classmethod
    def apply_filter(cls, user, saved_filter):
        ensure_workspace_access(user, saved_filter.project.workspace)
        issues = (
            Issue.objects.filter(project=saved_filter.project)
            .select_related("assignee", "reporter")
            .prefetch_related("labels")
        )
        return cls.filter_issues(issues, saved_filter.criteria).order_by(
            "-created_at", "id"
        )
