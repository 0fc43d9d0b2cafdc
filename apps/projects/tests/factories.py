"""
Factory classes for project models.
"""
import factory
from factory.django import DjangoModelFactory

from apps.authentication.tests.factories import UserFactory
from apps.projects.models import (
    Issue,
    IssueComment,
    IssueLink,
    Label,
    Project,
    Sprint,
)
from apps.workspaces.tests.factories import WorkspaceFactory


class ProjectFactory(DjangoModelFactory):
    class Meta:
        model = Project

    workspace = factory.SubFactory(WorkspaceFactory)
    name = factory.Sequence(lambda n: f"Project {n}")
    key = factory.Sequence(lambda n: f"P{n}")
    description = factory.Faker("sentence")
    lead = factory.SelfAttribute("workspace.owner")


class IssueFactory(DjangoModelFactory):
    """
    Issue inserted directly, bypassing the issue service. Keys follow the
    sequence and ``order`` is whatever the test passes (default 0).
    """

    class Meta:
        model = Issue

    project = factory.SubFactory(ProjectFactory)
    # Numbered high so service-generated keys (PROJ-1, PROJ-2, ...) never collide
    key = factory.LazyAttributeSequence(lambda o, n: f"{o.project.key}-{n + 1000}")
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    type = "TASK"
    status = "BACKLOG"
    priority = "MEDIUM"
    order = 0
    reporter = factory.SelfAttribute("project.workspace.owner")


class LabelFactory(DjangoModelFactory):
    class Meta:
        model = Label

    project = factory.SubFactory(ProjectFactory)
    name = factory.Sequence(lambda n: f"label-{n}")
    color = "#1E88E5"


class SprintFactory(DjangoModelFactory):
    class Meta:
        model = Sprint

    project = factory.SubFactory(ProjectFactory)
    name = factory.Sequence(lambda n: f"Sprint {n}")
    goal = factory.Faker("sentence")


class IssueCommentFactory(DjangoModelFactory):
    class Meta:
        model = IssueComment

    issue = factory.SubFactory(IssueFactory)
    author = factory.SubFactory(UserFactory)
    content = factory.Faker("paragraph")


class IssueLinkFactory(DjangoModelFactory):
    class Meta:
        model = IssueLink

    source_issue = factory.SubFactory(IssueFactory)
    target_issue = factory.SubFactory(
        IssueFactory, project=factory.SelfAttribute("..source_issue.project")
    )
    link_type = "BLOCKS"
    created_by = factory.SelfAttribute("source_issue.reporter")
