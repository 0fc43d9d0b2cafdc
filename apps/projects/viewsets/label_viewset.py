from django.db import transaction

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.logging.services import LoggerService
from apps.projects.models import Label
from apps.projects.permissions import CanAccessProject
from apps.projects.serializers import LabelSerializer
from apps.projects.viewsets.nested import ProjectNestedMixin
from base.exceptions import Conflict

DUPLICATE_LABEL_MESSAGE = "A label with this name already exists"


@extend_schema_view(
    list=extend_schema(
        tags=["Projects"], operation_id="project_labels_list", summary="List Labels"
    ),
    create=extend_schema(
        tags=["Projects"], operation_id="project_labels_create", summary="Create Label"
    ),
    partial_update=extend_schema(
        tags=["Projects"], operation_id="project_labels_partial_update", summary="Update Label"
    ),
    destroy=extend_schema(
        tags=["Projects"],
        operation_id="project_labels_destroy",
        summary="Delete Label",
        description="The label is removed from every issue carrying it.",
    ),
)
class LabelViewSet(
    ProjectNestedMixin,
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = LabelSerializer
    permission_classes = [IsAuthenticated, CanAccessProject]
    pagination_class = None

    def get_queryset(self):
        return Label.objects.filter(project=self.get_project()).order_by("name")

    def _ensure_unique(self, name, exclude_id=None):
        duplicates = Label.objects.filter(project=self.get_project(), name=name)
        if exclude_id is not None:
            duplicates = duplicates.exclude(pk=exclude_id)
        if duplicates.exists():
            raise Conflict(DUPLICATE_LABEL_MESSAGE)

    @transaction.atomic
    def perform_create(self, serializer):
        self._ensure_unique(serializer.validated_data["name"])
        label = serializer.save(project=self.get_project())

        LoggerService.log_info(
            action="label_created",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"label_id": str(label.id), "project_id": str(label.project_id)},
        )

    @transaction.atomic
    def perform_update(self, serializer):
        if "name" in serializer.validated_data:
            self._ensure_unique(
                serializer.validated_data["name"], exclude_id=serializer.instance.id
            )
        serializer.save()

    def perform_destroy(self, instance):
        LoggerService.log_info(
            action="label_deleted",
            user=self.request.user,
            ip_address=self.request.META.get("REMOTE_ADDR"),
            details={"label_id": str(instance.id), "name": instance.name},
        )
        instance.delete()
