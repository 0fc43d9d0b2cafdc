from django.db import transaction

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.projects.models import Project
from apps.projects.serializers import IssueListSerializer
from apps.reporting.models import SavedFilter
from apps.reporting.permissions import IsFilterOwner
from apps.reporting.serializers import (
    SavedFilterCreateSerializer,
    SavedFilterSerializer,
    SavedFilterUpdateSerializer,
)
from apps.reporting.services import SavedFilterService
from apps.workspaces.services import ensure_workspace_access


@extend_schema_view(
    list=extend_schema(
        tags=["Reporting"],
        operation_id="saved_filters_list",
        summary="List my saved filters of a project",
        parameters=[
            OpenApiParameter(
                "project", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=True
            )
        ],
    ),
    retrieve=extend_schema(
        tags=["Reporting"], operation_id="saved_filters_retrieve", summary="Get filter"
    ),
    destroy=extend_schema(
        tags=["Reporting"], operation_id="saved_filters_destroy", summary="Delete filter"
    ),
)
class SavedFilterViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = SavedFilterSerializer
    permission_classes = [IsAuthenticated, IsFilterOwner]
    pagination_class = None

    def _project_from_query(self):
        project_id = self.request.query_params.get("project")
        if not project_id:
            raise ValidationError({"project": ["This query parameter is required."]})
        project = Project.objects.select_related("workspace").filter(pk=project_id).first()
        if project is None:
            raise NotFound("Project not found")
        ensure_workspace_access(self.request.user, project.workspace)
        return project

    def get_queryset(self):
        queryset = SavedFilter.objects.select_related("project__workspace")
        if self.action != "list":
            return queryset

        project = self._project_from_query()
        return queryset.filter(project=project, user=self.request.user).order_by(
            "-is_default", "name"
        )

    @extend_schema(
        tags=["Reporting"],
        operation_id="saved_filters_create",
        summary="Save a filter",
        request=SavedFilterCreateSerializer,
        responses={201: SavedFilterSerializer},
    )
    def create(self, request):
        serializer = SavedFilterCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        saved_filter = SavedFilterService.create_filter(
            request.user, serializer.validated_data
        )

        LoggerService.log_info(
            action="saved_filter_created",
            user=request.user,
            ip_address=request.META.get("REMOTE_ADDR"),
            details={"filter_id": str(saved_filter.id), "name": saved_filter.name},
        )
        return Response(
            SavedFilterSerializer(saved_filter).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(
        tags=["Reporting"],
        operation_id="saved_filters_partial_update",
        summary="Update filter",
        request=SavedFilterUpdateSerializer,
        responses={200: SavedFilterSerializer},
    )
    def partial_update(self, request, pk=None):
        saved_filter = self.get_object()
        serializer = SavedFilterUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        saved_filter = SavedFilterService.update_filter(
            saved_filter, serializer.validated_data
        )
        return Response(SavedFilterSerializer(saved_filter).data)

    @transaction.atomic
    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="saved_filter_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"filter_id": str(instance.id), "name": instance.name},
        )
        instance.delete()

    @extend_schema(
        tags=["Reporting"],
        operation_id="saved_filters_apply",
        summary="Issues matching a saved filter",
        request=None,
        responses={200: IssueListSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def apply(self, request, pk=None):
        saved_filter = self.get_object()
        issues = SavedFilterService.apply_filter(request.user, saved_filter)
        return Response(IssueListSerializer(issues, many=True).data)

    @extend_schema(
        tags=["Reporting"],
        operation_id="saved_filters_default",
        summary="My default filter of a project",
        description="Returns null when no filter of the project is marked default.",
        parameters=[
            OpenApiParameter(
                "project", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=True
            )
        ],
        responses={200: SavedFilterSerializer},
    )
    @action(detail=False, methods=["get"], url_path="default")
    def default(self, request):
        project = self._project_from_query()
        saved_filter = SavedFilterService.get_default_filter(request.user, project)
        if saved_filter is None:
            return Response(None)
        return Response(SavedFilterSerializer(saved_filter).data)
