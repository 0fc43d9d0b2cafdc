"""
Activity history driven by issue domain events.

Receivers run inside the issue store's transaction, so an activity row
exists exactly when the change it describes was committed.
"""

from django.dispatch import receiver

from apps.projects.signals import issue_created, issue_updated
from apps.reporting.services import ActivityService


@receiver(issue_created)
def record_issue_created(sender, issue, actor, event, **kwargs):
    ActivityService.log_issue_event(issue, actor, event)


@receiver(issue_updated)
def record_issue_updated(sender, issue, actor, event, **kwargs):
    ActivityService.log_issue_event(issue, actor, event)
