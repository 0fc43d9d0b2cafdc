from django.db import transaction

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.projects.models import Project
from apps.projects.permissions import CanAccessProject, IsProjectAdmin
from apps.projects.serializers import (
    BoardColumnSerializer,
    IssueListSerializer,
    ProjectCreateSerializer,
    ProjectSerializer,
    ProjectUpdateSerializer,
)
from apps.projects.services import project_backlog, project_board
from apps.workspaces.models import Workspace
from apps.workspaces.services import (
    accessible_workspaces,
    ensure_workspace_access,
    has_workspace_access,
)
from base.exceptions import Conflict

DUPLICATE_KEY_MESSAGE = "A project with this key already exists in this workspace"


@extend_schema_view(
    list=extend_schema(
        tags=["Projects"],
        operation_id="projects_list",
        summary="List Projects",
        description=(
            "Projects of every workspace the caller can access, or of one "
            "workspace when `?workspace=` is given (403 without access)."
        ),
        parameters=[
            OpenApiParameter(
                name="workspace",
                type=OpenApiTypes.UUID,
                location=OpenApiParameter.QUERY,
                description="Filter projects by workspace UUID",
                required=False,
            ),
        ],
    ),
    retrieve=extend_schema(
        tags=["Projects"],
        operation_id="projects_retrieve",
        summary="Get Project Details",
    ),
    create=extend_schema(
        tags=["Projects"],
        operation_id="projects_create",
        summary="Create Project",
        description="The key is stored uppercase and must be unique in the workspace. The caller becomes the lead.",
        request=ProjectCreateSerializer,
        responses={201: ProjectSerializer},
    ),
    partial_update=extend_schema(
        tags=["Projects"],
        operation_id="projects_partial_update",
        summary="Update Project",
        request=ProjectUpdateSerializer,
        responses={200: ProjectSerializer},
    ),
    destroy=extend_schema(
        tags=["Projects"],
        operation_id="projects_destroy",
        summary="Delete Project",
        description="Workspace owner or ADMIN only. Deletes every issue of the project.",
    ),
)
class ProjectViewSet(viewsets.ModelViewSet):
    serializer_class = ProjectSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    search_fields = ["name", "key"]
    ordering_fields = ["name", "key", "created_at"]

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAuthenticated(), IsProjectAdmin()]
        elif self.action in ["retrieve", "partial_update", "board", "backlog"]:
            return [IsAuthenticated(), CanAccessProject()]
        return [IsAuthenticated()]

    def get_queryset(self):
        queryset = Project.objects.select_related("workspace", "lead")
        if self.action != "list":
            return queryset

        workspace_id = self.request.query_params.get("workspace")
        if workspace_id:
            workspace = Workspace.objects.filter(pk=workspace_id).first()
            if workspace is None:
                raise NotFound("Workspace not found")
            ensure_workspace_access(self.request.user, workspace)
            queryset = queryset.filter(workspace=workspace)
        else:
            queryset = queryset.filter(
                workspace__in=accessible_workspaces(self.request.user)
            )
        return queryset.order_by("name")

    def create(self, request, *args, **kwargs):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        workspace = Workspace.objects.filter(pk=data["workspace_id"]).first()
        if workspace is None:
            raise NotFound("Workspace not found")
        ensure_workspace_access(request.user, workspace)

        with transaction.atomic():
            if Project.objects.filter(workspace=workspace, key=data["key"]).exists():
                raise Conflict(DUPLICATE_KEY_MESSAGE)
            project = Project.objects.create(
                workspace=workspace,
                name=data["name"],
                key=data["key"],
                description=data.get("description", ""),
                lead=request.user,
            )

        LoggerService.log_info(
            action="project_created",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={"project_id": str(project.id), "key": project.key},
        )
        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        project = self.get_object()
        serializer = ProjectUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        with transaction.atomic():
            if "key" in data and data["key"] != project.key:
                duplicate = Project.objects.filter(
                    workspace_id=project.workspace_id, key=data["key"]
                ).exclude(pk=project.pk)
                if duplicate.exists():
                    raise Conflict(DUPLICATE_KEY_MESSAGE)
            if "lead_id" in data:
                project.lead = self._resolve_lead(project, data.pop("lead_id"))
            for field, value in data.items():
                setattr(project, field, value)
            project.save()

        LoggerService.log_info(
            action="project_updated",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={
                "project_id": str(project.id),
                "updated_fields": sorted(serializer.validated_data.keys()),
            },
        )
        return Response(ProjectSerializer(project).data)

    @staticmethod
    def _resolve_lead(project, lead_id):
        if lead_id is None:
            return None
        from apps.authentication.models import User

        lead = User.objects.filter(pk=lead_id).first()
        if lead is None or not has_workspace_access(lead, project.workspace):
            raise ValidationError({"lead_id": ["Lead must be a member of this workspace"]})
        return lead

    @transaction.atomic
    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="project_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"project_id": str(instance.id), "key": instance.key},
        )
        instance.delete()

    @extend_schema(
        tags=["Projects"],
        operation_id="projects_board",
        summary="Project Board",
        description=(
            "Top-level issues grouped into one column per status "
            "(BACKLOG, TODO, IN_PROGRESS, IN_REVIEW, DONE, CANCELLED), "
            "each sorted by order."
        ),
        responses={200: BoardColumnSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def board(self, request, pk=None):
        project = self.get_object()
        columns = project_board(request.user, project)
        return Response(BoardColumnSerializer(columns, many=True).data)

    @extend_schema(
        tags=["Projects"],
        operation_id="projects_backlog",
        summary="Project Backlog",
        description="Top-level issues of the project, newest first.",
        responses={200: IssueListSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def backlog(self, request, pk=None):
        project = self.get_object()
        issues = project_backlog(request.user, project)
        return Response(IssueListSerializer(issues, many=True).data)
