"""Data models for versioning."""

from dataclasses import dataclass, field
from typing import Optional

from .comparator import compare_versions


def _short_string(version: str, branch: str) -> str:
    text = version
    if version and branch:
        text += " "
    if branch:
        text += f"({branch})"
    return text


@dataclass(frozen=True)
class BranchedVersion:
    """A version string with a branch annotation, e.g. ``1.2.1`` on ``stable``.

    Ordered by version (see ``compare_versions``), then by branch as a plain
    string. None inputs are stored as empty strings.
    """
    version: Optional[str] = ""
    branch: Optional[str] = ""
    short_string: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "version", self.version or "")
        object.__setattr__(self, "branch", self.branch or "")
        object.__setattr__(self, "short_string", _short_string(self.version, self.branch))

    def compare_to(self, other: "BranchedVersion") -> int:
        result = compare_versions(self.version, other.version)
        if result:
            return result
        return (self.branch > other.branch) - (self.branch < other.branch)

    def __lt__(self, other):
        if not isinstance(other, BranchedVersion):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other):
        if not isinstance(other, BranchedVersion):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, BranchedVersion):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other):
        if not isinstance(other, BranchedVersion):
            return NotImplemented
        return self.compare_to(other) >= 0
