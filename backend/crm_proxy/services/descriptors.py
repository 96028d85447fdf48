"""
CRM Proxy — Resource/Action Descriptor Table
=============================================

What:  One declarative row per supported (resource, action) pair.
Why:   Every endpoint of the proxy differs only in method, path suffix,
       query handling and body shape; those differences live here instead
       of in one hand-written handler per endpoint.
Who:   Read by the Forwarder (to build upstream calls) and by the object
       router (to register inbound routes).

Row anatomy:
    method         Upstream HTTP method, identical to the inbound one
    suffix         Path appended to /crm/v3/objects/{object}, may hold {id}/{email}
    route          Inbound path relative to /{collection}
    default_query  Applied only when the caller omits the key
    fixed_query    Always applied, overrides the caller
    transform      Body transform; None means the action sends no body
"""

from dataclasses import dataclass, field
from enum import Enum
from string import Formatter
from typing import Any, Callable, Dict, List, Optional, Tuple

from crm_proxy.exceptions import ValidationError

# Query strings are multi-valued (HubSpot repeats `properties`, `associations`)
QueryPairs = List[Tuple[str, str]]


class ResourceType(str, Enum):
    CONTACT = "contact"
    DEAL = "deal"
    COMPANY = "company"
    TICKET = "ticket"


class Action(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    UPDATE_BY_EMAIL = "updateByEmail"
    DELETE = "delete"
    SEARCH = "search"
    SEARCH_BY_NAME_EXACT = "searchByNameExact"
    SEARCH_BY_NAME_CONTAINS = "searchByNameContains"


# Upstream object segment and inbound collection segment per resource
OBJECT_PATHS: Dict[ResourceType, str] = {
    ResourceType.CONTACT: "contacts",
    ResourceType.DEAL: "deals",
    ResourceType.COMPANY: "companies",
    ResourceType.TICKET: "tickets",
}

CONTACT_PROPERTIES = "firstname,lastname,id,email,hs_lead_status"

BodyTransform = Callable[[Dict[str, Any]], Dict[str, Any]]


# ══════════════════════════════════════════════════════════════════════════
# Body Transforms
# ══════════════════════════════════════════════════════════════════════════

def passthrough(body: Dict[str, Any]) -> Dict[str, Any]:
    return body


def properties_only(body: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only `properties`; HubSpot rejects other top-level keys on these calls."""
    if body.get("properties") is None:
        raise ValidationError("Missing required field 'properties'", field="properties")
    return {"properties": body["properties"]}


def _deal_name_search(operator: str, field_name: str) -> BodyTransform:
    def transform(body: Dict[str, Any]) -> Dict[str, Any]:
        value = body.get(field_name)
        if value is None or value == "":
            raise ValidationError(f"Missing required field '{field_name}'", field=field_name)
        return {
            "filterGroups": [{
                "filters": [{
                    "propertyName": "dealname",
                    "operator": operator,
                    "value": value,
                }]
            }],
            "properties": ["dealname", "amount"],
            "limit": 5,
            "sorts": ["-createdate"],
        }

    transform.__name__ = f"deal_name_{operator.lower()}"
    return transform


deal_name_exact = _deal_name_search("EQ", "name")
deal_name_contains = _deal_name_search("CONTAINS_TOKEN", "namePart")


# ══════════════════════════════════════════════════════════════════════════
# Descriptor
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ActionDescriptor:
    method: str
    suffix: str = ""
    route: str = ""
    default_query: Dict[str, str] = field(default_factory=dict)
    fixed_query: Dict[str, str] = field(default_factory=dict)
    transform: Optional[BodyTransform] = None

    @property
    def requires_body(self) -> bool:
        return self.transform is not None

    @property
    def path_params(self) -> Tuple[str, ...]:
        """Placeholder names in the upstream suffix, e.g. ('id',)."""
        return tuple(name for _, name, _, _ in Formatter().parse(self.suffix) if name)

    def build_query(self, caller_query: QueryPairs) -> QueryPairs:
        """
        Merge caller pairs with the row's defaults and fixed values.

        Repeated caller keys keep every value and their order. A fixed key
        drops all caller values for that key; a default key is added only
        when the caller sent none.
        """
        caller_keys = {key for key, _ in caller_query}
        merged = [(k, v) for k, v in self.default_query.items() if k not in caller_keys]
        merged.extend((k, v) for k, v in caller_query if k not in self.fixed_query)
        merged.extend(self.fixed_query.items())
        return merged


DESCRIPTORS: Dict[Tuple[ResourceType, Action], ActionDescriptor] = {
    # ── Contacts ──────────────────────────────────────────────────────────
    (ResourceType.CONTACT, Action.LIST): ActionDescriptor("GET"),
    (ResourceType.CONTACT, Action.GET): ActionDescriptor(
        "GET", "/{id}", "/{id}", fixed_query={"properties": CONTACT_PROPERTIES},
    ),
    (ResourceType.CONTACT, Action.UPDATE): ActionDescriptor(
        "PATCH", "/{id}", "/{id}", transform=properties_only,
    ),
    (ResourceType.CONTACT, Action.UPDATE_BY_EMAIL): ActionDescriptor(
        "PATCH", "/{email}", "/email/{email}",
        fixed_query={"idProperty": "email"}, transform=properties_only,
    ),
    (ResourceType.CONTACT, Action.DELETE): ActionDescriptor("DELETE", "/{id}", "/{id}"),
    (ResourceType.CONTACT, Action.SEARCH): ActionDescriptor(
        "POST", "/search", "/search", transform=passthrough,
    ),

    # ── Deals ─────────────────────────────────────────────────────────────
    (ResourceType.DEAL, Action.LIST): ActionDescriptor("GET"),
    (ResourceType.DEAL, Action.GET): ActionDescriptor("GET", "/{id}", "/{id}"),
    (ResourceType.DEAL, Action.CREATE): ActionDescriptor("POST", transform=passthrough),
    (ResourceType.DEAL, Action.UPDATE): ActionDescriptor(
        "PATCH", "/{id}", "/{id}", transform=passthrough,
    ),
    (ResourceType.DEAL, Action.DELETE): ActionDescriptor("DELETE", "/{id}", "/{id}"),
    (ResourceType.DEAL, Action.SEARCH): ActionDescriptor(
        "POST", "/search", "/search", transform=passthrough,
    ),
    (ResourceType.DEAL, Action.SEARCH_BY_NAME_EXACT): ActionDescriptor(
        "POST", "/search", "/search-by-name-exact", transform=deal_name_exact,
    ),
    (ResourceType.DEAL, Action.SEARCH_BY_NAME_CONTAINS): ActionDescriptor(
        "POST", "/search", "/search-by-name-contains", transform=deal_name_contains,
    ),

    # ── Companies ─────────────────────────────────────────────────────────
    (ResourceType.COMPANY, Action.LIST): ActionDescriptor(
        "GET", default_query={"limit": "10", "archived": "false"},
    ),
    (ResourceType.COMPANY, Action.GET): ActionDescriptor("GET", "/{id}", "/{id}"),
    (ResourceType.COMPANY, Action.CREATE): ActionDescriptor("POST", transform=passthrough),
    (ResourceType.COMPANY, Action.UPDATE): ActionDescriptor(
        "PATCH", "/{id}", "/{id}", transform=passthrough,
    ),
    (ResourceType.COMPANY, Action.DELETE): ActionDescriptor("DELETE", "/{id}", "/{id}"),
    (ResourceType.COMPANY, Action.SEARCH): ActionDescriptor(
        "POST", "/search", "/search", transform=passthrough,
    ),

    # ── Tickets ───────────────────────────────────────────────────────────
    (ResourceType.TICKET, Action.LIST): ActionDescriptor("GET"),
    (ResourceType.TICKET, Action.GET): ActionDescriptor("GET", "/{id}", "/{id}"),
    (ResourceType.TICKET, Action.CREATE): ActionDescriptor("POST", transform=properties_only),
    (ResourceType.TICKET, Action.UPDATE): ActionDescriptor(
        "PATCH", "/{id}", "/{id}", transform=properties_only,
    ),
    (ResourceType.TICKET, Action.DELETE): ActionDescriptor("DELETE", "/{id}", "/{id}"),
}


def get_descriptor(resource: ResourceType, action: Action) -> ActionDescriptor:
    try:
        return DESCRIPTORS[(ResourceType(resource), Action(action))]
    except (KeyError, ValueError):
        resource_name = getattr(resource, "value", resource)
        action_name = getattr(action, "value", action)
        raise ValidationError(
            f"Action '{action_name}' is not supported for resource '{resource_name}'",
            context={"resource": resource_name, "action": action_name},
        ) from None
