"""
Notification fan-out driven by issue domain events.
"""

import logging

from django.dispatch import receiver

from apps.notifications.services import NotificationService
from apps.projects.signals import issue_created, issue_updated

logger = logging.getLogger(__name__)


@receiver(issue_created)
def notify_on_issue_created(sender, issue, event, actor, **kwargs):
    if issue.assignee_id:
        NotificationService().notify_issue_assigned(issue, actor)


@receiver(issue_updated)
def notify_on_issue_updated(sender, issue, event, actor, **kwargs):
    changes = event["changes"]
    service = NotificationService()

    if "assignee_id" in changes and issue.assignee_id:
        service.notify_issue_assigned(issue, actor)

    if "status" in changes and changes["status"][1] == "DONE":
        service.notify_issue_completed(issue, actor)

    logger.debug(f"Processed notifications for {event['issue_key']}")
