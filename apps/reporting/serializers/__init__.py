from .activity_log_serializer import ActivityLogSerializer
from .saved_filter_serializer import (
    FilterCriteriaSerializer,
    SavedFilterCreateSerializer,
    SavedFilterSerializer,
    SavedFilterUpdateSerializer,
)

__all__ = [
    "ActivityLogSerializer",
    "FilterCriteriaSerializer",
    "SavedFilterCreateSerializer",
    "SavedFilterSerializer",
    "SavedFilterUpdateSerializer",
]
