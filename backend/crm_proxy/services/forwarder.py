"""
CRM Proxy — Forwarder
======================

What:  Translates one inbound request into one upstream CRM call.
Why:   This is the whole service: every route is a descriptor row plus this
       one generic operation.
Who:   Called by the object routes; tests call it directly with a mock client.

Flow:
    1. Normalize Authorization     → AuthorizationError (401) when absent
    2. Look up (resource, action)  → ValidationError (400) when unsupported
    3. Resolve path parameters     → ValidationError (400) when missing
    4. Validate + transform body   → ValidationError (400) when missing
    5. Merge query pairs (default < caller < fixed, repeated keys kept)
    6. CRMClient.send()            → ForwardResponse, relayed unchanged

Steps 1-5 never touch the network, so a local failure costs zero upstream calls.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from crm_proxy.config import settings
from crm_proxy.exceptions import ValidationError
from crm_proxy.schemas.forwarding import ForwardRequest, ForwardResponse
from crm_proxy.services.credentials import normalize_bearer
from crm_proxy.services.crm_base import CRMClient
from crm_proxy.services.descriptors import (
    OBJECT_PATHS,
    Action,
    ActionDescriptor,
    QueryPairs,
    ResourceType,
    get_descriptor,
)
from crm_proxy.services.hubspot_client import hubspot_client

logger = logging.getLogger(__name__)

OBJECTS_PREFIX = "/crm/v3/objects"

# A plain mapping, a Starlette QueryParams multi-dict, or (key, value) pairs
QueryInput = Union[None, Mapping[str, Any], Iterable[Tuple[str, Any]]]


class Forwarder:
    """
    Stateless request translator.

    `client` and `base_url` default to the shared HubSpot client and the
    configured upstream base; both are overridable for tests.
    """

    def __init__(self, client: Optional[CRMClient] = None, base_url: Optional[str] = None):
        self.client = client or hubspot_client
        self.base_url = (base_url or settings.hubspot_base_url).rstrip("/")

    def build_request(
        self,
        resource: ResourceType,
        action: Action,
        route_params: Optional[Mapping[str, str]] = None,
        query: QueryInput = None,
        body: Any = None,
        auth_header: Optional[str] = None,
    ) -> ForwardRequest:
        """Resolve everything about the upstream call without issuing it."""
        authorization = normalize_bearer(auth_header)
        descriptor = get_descriptor(resource, action)

        path_params = self._resolve_path_params(descriptor, route_params or {})
        object_path = f"/{OBJECT_PATHS[ResourceType(resource)]}{descriptor.suffix}"
        url = self.base_url + OBJECTS_PREFIX + object_path.format(
            **{name: quote(value, safe="@") for name, value in path_params.items()}
        )

        return ForwardRequest(
            method=descriptor.method,
            path_template=object_path,
            path_params=path_params,
            url=url,
            query=descriptor.build_query(self._query_pairs(query)),
            body=self._transform_body(descriptor, body),
            authorization=authorization,
        )

    async def forward(
        self,
        resource: ResourceType,
        action: Action,
        route_params: Optional[Mapping[str, str]] = None,
        query: QueryInput = None,
        body: Any = None,
        auth_header: Optional[str] = None,
    ) -> ForwardResponse:
        """
        Forward one request upstream and return the upstream answer as-is.

        Raises:
            AuthorizationError: no usable bearer token (401, no upstream call)
            ValidationError: missing path param / body / body field (400, no upstream call)
            UpstreamTransportError: upstream call could not complete (500, not retried)
        """
        request = self.build_request(resource, action, route_params, query, body, auth_header)
        logger.debug(
            "Forwarding %s.%s -> %s %s",
            getattr(resource, "value", resource),
            getattr(action, "value", action),
            request.method,
            request.path_template,
        )
        return await self.client.send(request)

    @staticmethod
    def _query_pairs(query: QueryInput) -> QueryPairs:
        if query is None:
            return []
        if hasattr(query, "multi_items"):
            items = query.multi_items()
        elif isinstance(query, Mapping):
            items = query.items()
        else:
            items = query
        return [(str(key), str(value)) for key, value in items]

    @staticmethod
    def _resolve_path_params(
        descriptor: ActionDescriptor, route_params: Mapping[str, str]
    ) -> Dict[str, str]:
        resolved = {}
        for name in descriptor.path_params:
            value = route_params.get(name)
            if value is None or not str(value).strip():
                raise ValidationError(f"Missing required path parameter '{name}'", field=name)
            resolved[name] = str(value)
        return resolved

    @staticmethod
    def _transform_body(descriptor: ActionDescriptor, body: Any) -> Optional[Dict[str, Any]]:
        if not descriptor.requires_body:
            return None
        if body is None:
            raise ValidationError("Request body is required", field="body")
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object", field="body")
        return descriptor.transform(body)


# ── Singleton Instance ────────────────────────────────────────────────────
forwarder = Forwarder()
