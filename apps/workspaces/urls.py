from django.urls import include, path

from rest_framework.routers import SimpleRouter

from .viewsets import InvitationViewSet, WorkspaceViewSet

router = SimpleRouter()
router.register(r"", WorkspaceViewSet, basename="workspaces")

urlpatterns = [
    path(
        "invitations/mine/",
        InvitationViewSet.as_view({"get": "mine"}),
        name="invitation-mine",
    ),
    path(
        "invitations/<str:token>/respond/",
        InvitationViewSet.as_view({"post": "respond"}),
        name="invitation-respond",
    ),
    path(
        "invitations/<uuid:pk>/",
        InvitationViewSet.as_view({"delete": "destroy"}),
        name="invitation-detail",
    ),
    path(
        "<uuid:workspace_pk>/invitations/",
        InvitationViewSet.as_view({"get": "list", "post": "create"}),
        name="workspace-invitations",
    ),
    path("", include(router.urls)),
]
