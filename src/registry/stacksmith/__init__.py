"""Stacksmith API package.

- parse.py: decoding of discovery, stack and flavor response bodies
- client.py: HTTP interactions with the Stacksmith API
"""

from .client import StacksmithClient, get_client  # noqa: F401
from .parse import (  # noqa: F401
    parse_dependency_ids,
    parse_entities,
    parse_flavor_ids,
    parse_stack_reference,
)

__all__ = [
    "StacksmithClient",
    "get_client",
    "parse_entities",
    "parse_dependency_ids",
    "parse_flavor_ids",
    "parse_stack_reference",
]
