"""
CRM Proxy — CRM Object Routes
==============================

What:  Registers every contact/deal/company/ticket endpoint from the descriptor table.
Why:   The endpoints differ only in data, so they share one handler factory
       instead of one hand-written function each.
How:   For each (resource, action) row, add_api_route() binds a small closure
       that reads the request, calls the Forwarder, and relays the result.

Relay rules:
    upstream 204 or empty body → empty response, same status
    anything else              → JSON body exactly as upstream sent it, same status
"""

import json
import logging
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from crm_proxy.exceptions import ValidationError
from crm_proxy.schemas.forwarding import ErrorResponse, ForwardResponse
from crm_proxy.services.credentials import normalize_bearer
from crm_proxy.services.descriptors import (
    DESCRIPTORS,
    OBJECT_PATHS,
    Action,
    ActionDescriptor,
    ResourceType,
)
from crm_proxy.services.forwarder import forwarder

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_json_body(request: Request) -> Any:
    """Decode the inbound body; an empty body is None."""
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("Request body is not valid JSON", field="body") from None


def relay(result: ForwardResponse) -> Response:
    if result.is_empty:
        return Response(status_code=result.status_code)
    return JSONResponse(content=result.payload, status_code=result.status_code)


def make_endpoint(
    resource: ResourceType, action: Action, descriptor: ActionDescriptor
) -> Callable[[Request], Awaitable[Response]]:
    async def endpoint(request: Request) -> Response:
        # Token first: a missing header is a 401 even when the body is malformed
        authorization = normalize_bearer(request.headers.get("authorization"))
        body = await read_json_body(request) if descriptor.requires_body else None
        result = await forwarder.forward(
            resource,
            action,
            route_params=request.path_params,
            query=request.query_params.multi_items(),
            body=body,
            auth_header=authorization,
        )
        request.state.upstream_status = result.status_code
        return relay(result)

    endpoint.__name__ = f"{action.value}_{resource.value}"
    return endpoint


def register_object_routes(target: APIRouter) -> None:
    for (resource, action), descriptor in DESCRIPTORS.items():
        collection = OBJECT_PATHS[resource]
        target.add_api_route(
            f"/{collection}{descriptor.route}",
            make_endpoint(resource, action, descriptor),
            methods=[descriptor.method],
            name=f"{action.value}_{resource.value}",
            tags=[collection.capitalize()],
            summary=f"{action.value} {resource.value}",
            responses={
                400: {"description": "Missing parameter or body field", "model": ErrorResponse},
                401: {"description": "Missing Authorization header", "model": ErrorResponse},
                500: {"description": "Upstream call could not complete", "model": ErrorResponse},
            },
        )


register_object_routes(router)
