"""Catalog entities, stack references and version requirements."""

from .models import EntityCategory, StackReference, VersionedEntity, sorted_entities
from .requirement import (
    NO_REQUIREMENT,
    RequirementError,
    VersionedEntityRequirement,
    VersionRequirementOperator,
    requirement_from,
)

__all__ = [
    "EntityCategory",
    "StackReference",
    "VersionedEntity",
    "sorted_entities",
    "NO_REQUIREMENT",
    "RequirementError",
    "VersionedEntityRequirement",
    "VersionRequirementOperator",
    "requirement_from",
]
