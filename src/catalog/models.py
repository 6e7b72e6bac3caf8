"""Data models for catalog entities and stack references."""

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Iterable, Optional, Tuple

from constants import Constants
from versioning.comparator import sorted_unique
from versioning.models import BranchedVersion

_VERSION_KEY = cmp_to_key(BranchedVersion.compare_to)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


class EntityCategory(Enum):
    """Categories of versioned entities known to the catalog.

    Each value is the listing endpoint fragment relative to the API base URL.
    """

    COMPONENT = Constants.COMPONENTS_PATH
    OPERATING_SYSTEM = Constants.OPERATING_SYSTEMS_PATH
    UNKNOWN = ""

    @property
    def list_path(self) -> str:
        return self.value

    @property
    def order(self) -> int:
        """Declaration position, used as the primary sort key for entities."""
        return _CATEGORY_ORDER[self]

    def list_url(self, base_url: Optional[str] = None) -> str:
        """Return the listing endpoint URL for this category."""
        return (base_url or Constants.API_BASE_URL) + self.list_path

    @classmethod
    def from_api_string(cls, api_string: Optional[str]) -> "EntityCategory":
        """Map a wire category string to a category, UNKNOWN if unrecognized."""
        return _API_STRINGS.get(api_string, cls.UNKNOWN)


_CATEGORY_ORDER = {category: i for i, category in enumerate(EntityCategory)}

_API_STRINGS = {
    "component": EntityCategory.COMPONENT,
    "service": EntityCategory.COMPONENT,
    "runtime": EntityCategory.COMPONENT,
    "os": EntityCategory.OPERATING_SYSTEM,
}


@dataclass(frozen=True)
class VersionedEntity:
    """A component or operating system together with its known versions.

    ``versions`` may be given in any order and with duplicates; it is stored
    as a sorted, deduplicated tuple.
    """
    id: str
    name: str
    category: EntityCategory
    versions: Tuple[BranchedVersion, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "versions", tuple(sorted_unique(self.versions, _VERSION_KEY)))

    @property
    def latest(self) -> Optional[BranchedVersion]:
        """The greatest known version, or None when there are none."""
        return self.versions[-1] if self.versions else None

    def versions_descending(self) -> Tuple[BranchedVersion, ...]:
        return tuple(reversed(self.versions))

    def to_short_string(self) -> str:
        """Displayable form, e.g. ``Tomcat {1.0 (stable),2.0 (stable),}``."""
        text = self.name + " "
        if self.versions:
            text += "{" + "".join(v.short_string + "," for v in self.versions) + "}"
        return text

    def compare_to(self, other: "VersionedEntity") -> int:
        """Order by category, then name, then versions pairwise, then version count."""
        result = _cmp(self.category.order, other.category.order)
        if result:
            return result
        result = _cmp(self.name, other.name)
        if result:
            return result
        for mine, theirs in zip(self.versions, other.versions):
            result = mine.compare_to(theirs)
            if result:
                return result
        return _cmp(len(self.versions), len(other.versions))

    def __lt__(self, other):
        if not isinstance(other, VersionedEntity):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other):
        if not isinstance(other, VersionedEntity):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, VersionedEntity):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other):
        if not isinstance(other, VersionedEntity):
            return NotImplemented
        return self.compare_to(other) >= 0


entity_key = cmp_to_key(VersionedEntity.compare_to)


def sorted_entities(entities: Iterable[VersionedEntity]):
    """Return entities sorted by their total order, dropping order-equal duplicates."""
    return sorted_unique(entities, entity_key)


@dataclass(frozen=True)
class StackReference:
    """Handle to a stack created by the remote service."""
    id: str
    stack_url: str

    @property
    def dockerfile_url(self) -> str:
        """URL of the Dockerfile generated for this stack."""
        return self.stack_url + Constants.DOCKERFILE_URL_POSTFIX
