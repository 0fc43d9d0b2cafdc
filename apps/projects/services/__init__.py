from .board_projector import BOARD_COLUMNS, project_backlog, project_board
from .bulk_mutator import BULK_ACTIONS, BulkMutator
from .comment_service import CommentService
from .issue_key_generator import IssueKeyGenerator
from .issue_service import IssueService

__all__ = [
    "BOARD_COLUMNS",
    "BULK_ACTIONS",
    "BulkMutator",
    "CommentService",
    "IssueKeyGenerator",
    "IssueService",
    "project_backlog",
    "project_board",
]
