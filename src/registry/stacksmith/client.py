"""Stacksmith API client: entity discovery, stack creation and Dockerfile retrieval.

Every public method is a single request/response exchange. Operational
failures (transport errors, missing responses, malformed payloads) are
logged and reported by returning None; they never raise. Only misuse, such
as an object passed as transport that cannot execute requests, raises.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import Any, Iterable, List, Optional, TextIO, Tuple

from constants import Constants, load_config
from common.build_log import BuildLog
from common.http_client import HttpRequest, HttpTransport
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from catalog.models import EntityCategory, StackReference, VersionedEntity
from catalog.requirement import VersionedEntityRequirement

from .parse import (
    PARSE_ERRORS,
    parse_dependency_ids,
    parse_entities,
    parse_flavor_ids,
    parse_stack_reference,
)

logger = logging.getLogger(__name__)
build_log = BuildLog(logger)


class StacksmithClient:
    """Client for the Stacksmith discovery and stack APIs.

    The client holds no mutable state, so one instance may be shared by
    concurrent callers as long as the transport tolerates concurrent use.
    Results are never cached.
    """

    def __init__(self, transport: Any = None, base_url: Optional[str] = None):
        """Initialize the client.

        Args:
            transport: Object with an ``execute(HttpRequest)`` method returning
                a response with ``text`` and ``close()``. Defaults to a new
                HttpTransport.
            base_url: API base URL (defaults to Constants.API_BASE_URL).

        Raises:
            TypeError: if ``transport`` has no callable ``execute``.
        """
        if transport is None:
            transport = HttpTransport()
        elif not callable(getattr(transport, "execute", None)):
            raise TypeError("transport must provide an execute(request) method")
        self._transport = transport
        base = base_url or Constants.API_BASE_URL
        self.base_url = base if base.endswith("/") else base + "/"

    @property
    def stacks_url(self) -> str:
        return self.base_url + Constants.STACKS_PATH

    def dependencies_url(self, entity_id: str) -> str:
        """Discovery URL listing the dependencies of an entity."""
        return f"{self.base_url}{Constants.COMPONENTS_PATH}/{entity_id}/dependencies"

    def flavors_url(self, entity_id: str) -> str:
        """Discovery URL listing the flavors of an entity."""
        return f"{self.base_url}{Constants.COMPONENTS_PATH}/{entity_id}/flavors"

    def wrapped_execute(self, request: Optional[HttpRequest], build_stream: Optional[TextIO] = None) -> Optional[str]:
        """Execute ``request`` and return the response body as text.

        Returns:
            The body (possibly empty), or None if the request is None, the
            transport fails, no response is produced, or the response cannot
            be released.
        """
        if request is None:
            build_log.warning(build_stream, "Cannot execute a null HTTP request.")
            return None

        try:
            response = self._transport.execute(request)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            build_log.warning(build_stream, f"Error when contacting Stacksmith: {exc!r}")
            return None
        if response is None:
            build_log.warning(build_stream, "Null response from Stacksmith API.")
            return None

        text = None
        try:
            status = getattr(response, "status_code", None)
            if isinstance(status, int) and status >= 400:
                build_log.warning(
                    build_stream,
                    f"Stacksmith API responded with HTTP {status} for {request.method} {safe_url(request.url)}",
                )
            text = response.text
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP response body received",
                    extra=extra_context(
                        event="http_response",
                        component="stacksmith_client",
                        action=request.method,
                        status_code=status if isinstance(status, int) else None,
                        body_length=len(text) if text is not None else None,
                        target=safe_url(request.url),
                    ),
                )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            build_log.warning(build_stream, f"Error reading Stacksmith response: {exc!r}")
            text = None
        finally:
            try:
                response.close()
            except Exception as exc:  # pylint: disable=broad-exception-caught
                build_log.warning(build_stream, f"Error when closing HTTP response: {exc!r}")
                text = None
        return text

    def _request_json(
        self, request: HttpRequest, context: str, build_stream: Optional[TextIO] = None
    ) -> Tuple[bool, Any]:
        """Execute ``request`` and decode the body as JSON.

        Returns:
            Tuple of (ok, decoded_value); ``ok`` is False on any failure.
        """
        text = self.wrapped_execute(request, build_stream)
        if text is None:
            # wrapped_execute already logged the cause
            logger.debug("No JSON result from %s query.", context)
            return False, None
        try:
            return True, json.loads(text)
        except (ValueError, RecursionError) as exc:
            build_log.warning(build_stream, f"Malformed JSON in {context} response: {exc}")
            return False, None

    def fetch_entities(self, category: Optional[EntityCategory]) -> Optional[List[VersionedEntity]]:
        """List the entities of ``category``.

        Returns:
            Entities in their total order; an empty list when the catalog
            reports none; None if the listing could not be determined.
        """
        if category is None or category is EntityCategory.UNKNOWN:
            logger.info("Cannot fetch entities for category %s.", category)
            return None
        ok, data = self._request_json(HttpRequest.get(category.list_url(self.base_url)), "entity listing")
        if not ok:
            return None
        return parse_entities(data)

    def fetch_components(self) -> Optional[List[VersionedEntity]]:
        return self.fetch_entities(EntityCategory.COMPONENT)

    def fetch_operating_systems(self) -> Optional[List[VersionedEntity]]:
        return self.fetch_entities(EntityCategory.OPERATING_SYSTEM)

    def fetch_dependencies_for_entity(self, entity_id: Optional[str]) -> Optional[List[str]]:
        """List the dependency ids of an entity, sorted; None on failure."""
        if entity_id is None:
            logger.info("Cannot fetch dependencies for a null entity ID.")
            return None
        ok, data = self._request_json(HttpRequest.get(self.dependencies_url(entity_id)), "dependency listing")
        if not ok:
            return None
        return parse_dependency_ids(data)

    def fetch_flavors_for_entity(self, entity_id: Optional[str]) -> Optional[List[str]]:
        """List the flavor ids of an entity, sorted; None on failure."""
        if entity_id is None:
            logger.info("Cannot fetch flavors for a null entity ID.")
            return None
        ok, data = self._request_json(HttpRequest.get(self.flavors_url(entity_id)), "flavor listing")
        if not ok:
            return None
        return parse_flavor_ids(data)

    def make_stack(
        self,
        components: Optional[Iterable[Optional[VersionedEntityRequirement]]],
        os: Optional[VersionedEntityRequirement] = None,
        flavor: Optional[str] = None,
        build_stream: Optional[TextIO] = None,
    ) -> Optional[StackReference]:
        """Ask the API to create a stack from the given requirements.

        "No requirement" placeholders are left out of the request body. The
        request is sent even if nothing remains; the API decides how to
        respond to an empty body.

        Returns:
            The created stack's reference, or None on any failure.
        """
        payload = {}
        if components is not None:
            component_json = [c.to_json() for c in components if c is not None and not c.is_none()]
            if component_json:
                payload["components"] = component_json
        if os is not None and not os.is_none():
            payload["os"] = os.to_json()
        if flavor:
            payload["flavor"] = flavor

        ok, data = self._request_json(HttpRequest.post_json(self.stacks_url, payload), "stack creation", build_stream)
        if not ok:
            return None
        try:
            return parse_stack_reference(data)
        except PARSE_ERRORS as exc:
            build_log.warning(build_stream, f"Malformed stack reference from Stacksmith API: {exc!r}")
            return None

    def fetch_dockerfile(
        self, stack: Optional[StackReference], build_stream: Optional[TextIO] = None
    ) -> Optional[str]:
        """Fetch the Dockerfile generated for ``stack``.

        Returns:
            The raw Dockerfile text (may be empty), or None on failure.
        """
        if stack is None:
            build_log.info(build_stream, "Null stack reference in fetch_dockerfile.")
            return None
        result = self.wrapped_execute(HttpRequest.get(stack.dockerfile_url), build_stream)
        if result is not None:
            build_log.debug(build_stream, "Dockerfile received from Stacksmith API.")
        return result

    def close(self) -> None:
        """Release the transport if it supports closing."""
        closer = getattr(self._transport, "close", None)
        if callable(closer):
            closer()

    def __enter__(self) -> "StacksmithClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


_default_client: Optional[StacksmithClient] = None
_default_lock = threading.Lock()


def get_client() -> StacksmithClient:
    """Return the shared default client, loading config on first use."""
    global _default_client  # pylint: disable=global-statement
    with _default_lock:
        if _default_client is None:
            load_config()
            _default_client = StacksmithClient()
        return _default_client
