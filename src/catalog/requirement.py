"""Version requirements sent to the stack creation API.

A requirement is an entity id, a version operator and a version number. The
remote service picks the entity version that best matches it. For example,
"Java 1.7 or newer" is ``VersionedEntityRequirement("java", GE, "1.7")``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from constants import Constants

logger = logging.getLogger(__name__)


class RequirementError(ValueError):
    """Raised when a requirement is built without a required version number."""


class VersionRequirementOperator(Enum):
    """Version operators understood by the API, valued by their wire token."""

    LATEST = "latest"
    DEV = "dev"
    EQ = "="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    PESSIMISTIC = "~>"

    @property
    def api_string(self) -> str:
        return self.value

    @property
    def needs_version(self) -> bool:
        """False for LATEST and DEV, which never carry a version number."""
        return self not in (VersionRequirementOperator.LATEST, VersionRequirementOperator.DEV)

    def make_full_api_string(self, version_number: Optional[str]) -> str:
        """Render the wire version text, e.g. ``">= 1.7"`` or ``"latest"``."""
        if not self.needs_version:
            return self.value
        return f"{self.value} {version_number}"

    @classmethod
    def from_api_string_or_none(cls, api_string: Optional[str]) -> Optional["VersionRequirementOperator"]:
        try:
            return cls(api_string)
        except ValueError:
            return None

    @classmethod
    def from_api_string(cls, api_string: Optional[str]) -> "VersionRequirementOperator":
        """Look up an operator by wire token, defaulting to LATEST."""
        return cls.from_api_string_or_none(api_string) or cls.LATEST


@dataclass(frozen=True)
class VersionedEntityRequirement:
    """A requested entity id with a version constraint.

    Raises:
        RequirementError: if ``id`` or ``version_number`` is None, or if
            ``version_number`` is empty while ``operator`` is neither LATEST
            nor DEV.
    """
    id: str
    operator: VersionRequirementOperator = VersionRequirementOperator.LATEST
    version_number: str = ""

    def __post_init__(self):
        if self.id is None or self.version_number is None:
            raise RequirementError("Requirement id and version number must not be None.")
        if not self.version_number and self.operator.needs_version:
            raise RequirementError(
                "Version number must be specified when version operator is not LATEST or DEV."
            )

    def is_none(self) -> bool:
        """True iff this is the "no requirement" placeholder."""
        return self.id == Constants.NONE_ID

    @property
    def version_string(self) -> str:
        """Operator and version number formatted for the API."""
        return self.operator.make_full_api_string(self.version_number)

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "version": self.version_string}

    @staticmethod
    def no_requirement() -> "VersionedEntityRequirement":
        return NO_REQUIREMENT


NO_REQUIREMENT = VersionedEntityRequirement(Constants.NONE_ID)


def requirement_from(
    entity_id: Optional[str],
    operator: Optional[str],
    version_number: Optional[str],
) -> VersionedEntityRequirement:
    """Build a requirement from raw form values.

    Returns NO_REQUIREMENT when ``entity_id`` is empty or the NONE marker, or
    when the values do not form a valid requirement (logged as a warning).
    """
    if not entity_id or entity_id == Constants.NONE_ID:
        return NO_REQUIREMENT
    try:
        return VersionedEntityRequirement(
            id=entity_id,
            operator=VersionRequirementOperator.from_api_string(operator),
            version_number=version_number,
        )
    except RequirementError:
        logger.warning(
            "Cannot construct stack component requirement. ID: %s, version operator: %s, version number: %s",
            entity_id,
            "null" if operator is None else operator,
            "null" if version_number is None else version_number,
        )
        return NO_REQUIREMENT
