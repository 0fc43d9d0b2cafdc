import uuid

from django.db.models import Q

from django_filters import rest_framework as filters
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.projects.models import Issue, Project
from apps.projects.permissions import CanAccessProject
from apps.projects.serializers import (
    BulkIssueActionSerializer,
    IssueCreateSerializer,
    IssueDetailSerializer,
    IssueListSerializer,
    IssueMoveSerializer,
    IssueUpdateSerializer,
    SubtaskCreateSerializer,
)
from apps.projects.services import BulkMutator, IssueService
from apps.reporting.serializers import ActivityLogSerializer
from apps.reporting.services import ActivityService
from apps.workspaces.services import accessible_workspaces, ensure_workspace_access


class IssueFilter(filters.FilterSet):
    """
    Issue list filters.

    - project (UUID)
    - status, priority, type (enum values)
    - assignee (UUID, or ``unassigned`` for issues without assignee)
    - label (UUID)
    - search: case-insensitive match on key, title and description
    - top_level: ``true`` hides subtasks

    Examples:
    - /api/v1/projects/issues/?project=<uuid>&status=TODO
    - /api/v1/projects/issues/?assignee=unassigned&top_level=true
    - /api/v1/projects/issues/?search=login
    """

    project = filters.UUIDFilter(field_name="project__id")
    status = filters.ChoiceFilter(choices=Issue.STATUS_CHOICES)
    priority = filters.ChoiceFilter(choices=Issue.PRIORITY_CHOICES)
    type = filters.ChoiceFilter(choices=Issue.TYPE_CHOICES)
    assignee = filters.CharFilter(method="filter_assignee")
    label = filters.UUIDFilter(field_name="labels__id", distinct=True)
    search = filters.CharFilter(method="filter_search")
    top_level = filters.BooleanFilter(method="filter_top_level")

    class Meta:
        model = Issue
        fields = [
            "project",
            "status",
            "priority",
            "type",
            "assignee",
            "label",
            "search",
            "top_level",
        ]

    def filter_assignee(self, queryset, name, value):
        if value == "unassigned":
            return queryset.filter(assignee__isnull=True)
        try:
            uuid.UUID(value)
        except ValueError:
            raise ValidationError({"assignee": ["Enter a valid UUID or 'unassigned'."]})
        return queryset.filter(assignee_id=value)

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value)
            | Q(description__icontains=value)
            | Q(key__icontains=value)
        )

    def filter_top_level(self, queryset, name, value):
        if value:
            return queryset.filter(parent__isnull=True)
        return queryset


@extend_schema_view(
    list=extend_schema(
        tags=["Issues"],
        operation_id="issues_list",
        summary="List Issues",
        description=(
            "Issues of every accessible workspace. With `?project=` the caller "
            "must have access to that project's workspace (403 otherwise).\n\n"
            "**Filters:** `project`, `status`, `priority`, `type`, "
            "`assignee` (UUID or `unassigned`), `label`, `search`, `top_level`."
        ),
    ),
    retrieve=extend_schema(
        tags=["Issues"],
        operation_id="issues_retrieve",
        summary="Get Issue Details",
    ),
    create=extend_schema(
        tags=["Issues"],
        operation_id="issues_create",
        summary="Create Issue",
        description=(
            "The key is generated from the project key (e.g. ENG-1). Status "
            "defaults to BACKLOG and the issue is placed at the end of its "
            "status group. The caller becomes the reporter."
        ),
        request=IssueCreateSerializer,
        responses={201: IssueDetailSerializer},
    ),
    partial_update=extend_schema(
        tags=["Issues"],
        operation_id="issues_partial_update",
        summary="Update Issue",
        description=(
            "Only the fields present are changed. A status change without "
            "`order` appends the issue to the new column."
        ),
        request=IssueUpdateSerializer,
        responses={200: IssueDetailSerializer},
    ),
    destroy=extend_schema(
        tags=["Issues"],
        operation_id="issues_destroy",
        summary="Delete Issue",
        description="Also deletes subtasks, comments, attachments, links and activity.",
    ),
)
class IssueViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated]
    filterset_class = IssueFilter
    ordering_fields = ["priority", "created_at", "updated_at", "order"]
    ordering = ["-created_at"]

    def get_queryset(self):
        queryset = Issue.objects.select_related(
            "project__workspace", "assignee", "reporter", "parent"
        ).prefetch_related("labels")
        if self.action != "list":
            return queryset

        project_id = self.request.query_params.get("project")
        if project_id:
            project = Project.objects.select_related("workspace").filter(pk=project_id).first()
            if project is None:
                raise NotFound("Project not found")
            ensure_workspace_access(self.request.user, project.workspace)
            return queryset.filter(project=project)
        return queryset.filter(
            project__workspace__in=accessible_workspaces(self.request.user)
        )

    def get_serializer_class(self):
        if self.action == "retrieve":
            return IssueDetailSerializer
        return IssueListSerializer

    def get_permissions(self):
        if self.action in [
            "retrieve",
            "partial_update",
            "destroy",
            "move",
            "subtasks",
            "activity",
        ]:
            return [IsAuthenticated(), CanAccessProject()]
        return [IsAuthenticated()]

    def _detail(self, issue):
        issue = self.get_queryset().get(pk=issue.pk)
        return IssueDetailSerializer(issue, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):
        serializer = IssueCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        issue = IssueService.create_issue(request.user, serializer.validated_data)

        LoggerService.log_info(
            action="issue_created",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "issue_id": str(issue.id),
                "issue_key": issue.key,
                "project_id": str(issue.project_id),
            },
        )
        return Response(self._detail(issue), status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        issue = self.get_object()
        serializer = IssueUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        issue = IssueService.update_issue(request.user, issue, serializer.validated_data)

        LoggerService.log_info(
            action="issue_updated",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "issue_id": str(issue.id),
                "issue_key": issue.key,
                "updated_fields": sorted(serializer.validated_data.keys()),
            },
        )
        return Response(self._detail(issue))

    def perform_destroy(self, instance):
        event = IssueService.delete_issue(self.request.user, instance)

        LoggerService.log_info(
            action="issue_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"issue_id": event["issue_id"], "issue_key": event["issue_key"]},
        )

    @extend_schema(
        tags=["Issues"],
        operation_id="issues_move",
        summary="Move Issue on the Board",
        description=(
            "Set the status and, optionally, the position in the target "
            "column. A taken position pushes the issues at and after it down "
            "by one; without `order` the issue goes to the end of the column."
        ),
        request=IssueMoveSerializer,
        responses={200: IssueDetailSerializer},
    )
    @action(detail=True, methods=["post"])
    def move(self, request, pk=None):
        issue = self.get_object()
        serializer = IssueMoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        issue = IssueService.move_issue(
            request.user,
            issue,
            serializer.validated_data["status"],
            serializer.validated_data.get("order"),
        )

        LoggerService.log_info(
            action="issue_moved",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "issue_id": str(issue.id),
                "status": issue.status,
                "order": issue.order,
            },
        )
        return Response(self._detail(issue))

    @extend_schema(
        tags=["Issues"],
        operation_id="issues_subtasks",
        summary="List or Create Subtasks",
        description=(
            "GET lists the subtasks by position. POST creates a TASK or BUG "
            "subtask in the parent's project; subtasks cannot have subtasks."
        ),
        request=SubtaskCreateSerializer,
        responses={200: IssueListSerializer(many=True), 201: IssueDetailSerializer},
    )
    @action(detail=True, methods=["get", "post"])
    def subtasks(self, request, pk=None):
        issue = self.get_object()
        if request.method == "GET":
            subtasks = IssueService.list_subtasks(request.user, issue)
            return Response(IssueListSerializer(subtasks, many=True).data)

        serializer = SubtaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subtask = IssueService.create_subtask(
            request.user, issue, serializer.validated_data
        )

        LoggerService.log_info(
            action="subtask_created",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={"issue_id": str(subtask.id), "parent_id": str(issue.id)},
        )
        return Response(self._detail(subtask), status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Issues"],
        operation_id="issues_activity",
        summary="Issue Activity",
        description="History of the issue, newest first.",
        responses={200: ActivityLogSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def activity(self, request, pk=None):
        issue = self.get_object()
        activities = ActivityService.activities_for_issue(issue)
        return Response(ActivityLogSerializer(activities, many=True).data)

    @extend_schema(
        tags=["Issues"],
        operation_id="issues_bulk",
        summary="Bulk Issue Operation",
        description=(
            "Apply `updateStatus`, `assign`, `updatePriority` or `delete` to "
            "issues of one project. The whole batch succeeds or nothing "
            "changes. Moved issues are appended to the target column."
        ),
        request=BulkIssueActionSerializer,
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(detail=False, methods=["post"])
    def bulk(self, request):
        serializer = BulkIssueActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = BulkMutator.apply_bulk(
            request.user, data["action"], data["issue_ids"], data["payload"]
        )

        LoggerService.log_info(
            action="bulk_issue_action",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details=result,
        )
        return Response(result)
