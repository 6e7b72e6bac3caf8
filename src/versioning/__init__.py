"""Version string ordering and versioned value types."""

from .comparator import compare_versions, version_key
from .models import BranchedVersion

__all__ = [
    "compare_versions",
    "version_key",
    "BranchedVersion",
]
