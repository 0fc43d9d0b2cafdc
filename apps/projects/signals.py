"""
Issue domain events.

The issue store sends one of these signals after every successful
mutation, inside the same transaction, so activity rows and
notifications commit or roll back together with the change.

Receivers get ``issue`` (the instance, already deleted for
``issue_deleted``), ``actor`` (the session user) and ``event``, a plain
dict::

    {
        "type": "issue_updated",
        "issue_id": "...",
        "issue_key": "ENG-1",
        "project_id": "...",
        "actor_id": "...",
        "changes": {"status": ["TODO", "DONE"]},
    }
"""

from django.dispatch import Signal

issue_created = Signal()
issue_updated = Signal()
issue_deleted = Signal()

EVENT_SIGNALS = {
    "issue_created": issue_created,
    "issue_updated": issue_updated,
    "issue_deleted": issue_deleted,
}


def _plain(value):
    if value is None or isinstance(value, (str, int, bool)):
        return value
    if isinstance(value, (list, tuple, set)):
        return sorted(_plain(item) for item in value)
    return str(value)


def build_issue_event(event_type, issue, actor, changes=None):
    return {
        "type": event_type,
        "issue_id": str(issue.id),
        "issue_key": issue.key,
        "project_id": str(issue.project_id),
        "actor_id": str(actor.id) if actor else None,
        "changes": {
            field: [_plain(old), _plain(new)]
            for field, (old, new) in (changes or {}).items()
        },
    }


def emit_issue_event(event_type, issue, actor, changes=None):
    event = build_issue_event(event_type, issue, actor, changes)
    EVENT_SIGNALS[event_type].send(
        sender=issue.__class__, issue=issue, actor=actor, event=event
    )
    return event
