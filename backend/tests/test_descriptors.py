"""
CRM Proxy — Descriptor Table Tests
===================================

What we test:
    ✅ Exactly the supported (resource, action) pairs exist
    ✅ Body transforms keep/require the right fields
    ✅ Query precedence: default < caller < fixed, repeated keys kept
    ✅ Every descriptor becomes one inbound route
"""

import pytest

from crm_proxy.exceptions import ValidationError
from crm_proxy.services.descriptors import (
    CONTACT_PROPERTIES,
    DESCRIPTORS,
    Action,
    ResourceType,
    deal_name_contains,
    deal_name_exact,
    get_descriptor,
    properties_only,
)

EXPECTED_ROUTES = {
    ("GET", "/contacts"),
    ("GET", "/contacts/{id}"),
    ("PATCH", "/contacts/{id}"),
    ("PATCH", "/contacts/email/{email}"),
    ("DELETE", "/contacts/{id}"),
    ("POST", "/contacts/search"),
    ("GET", "/deals"),
    ("GET", "/deals/{id}"),
    ("POST", "/deals"),
    ("PATCH", "/deals/{id}"),
    ("DELETE", "/deals/{id}"),
    ("POST", "/deals/search"),
    ("POST", "/deals/search-by-name-exact"),
    ("POST", "/deals/search-by-name-contains"),
    ("GET", "/companies"),
    ("GET", "/companies/{id}"),
    ("POST", "/companies"),
    ("PATCH", "/companies/{id}"),
    ("DELETE", "/companies/{id}"),
    ("POST", "/companies/search"),
    ("GET", "/tickets"),
    ("GET", "/tickets/{id}"),
    ("POST", "/tickets"),
    ("PATCH", "/tickets/{id}"),
    ("DELETE", "/tickets/{id}"),
}


class TestDescriptorTable:
    """The (resource, action) table and its inbound routes."""

    def test_router_exposes_every_documented_route(self):
        """Every row registers exactly one method + path."""
        from crm_proxy.routes.objects import router

        registered = {
            (method, route.path)
            for route in router.routes
            for method in route.methods
        }
        assert registered == EXPECTED_ROUTES

    def test_unsupported_pair_is_validation_error(self):
        """Contacts have no create row."""
        with pytest.raises(ValidationError) as exc_info:
            get_descriptor(ResourceType.CONTACT, Action.CREATE)
        assert exc_info.value.context == {"resource": "contact", "action": "create"}

    def test_unknown_action_name_is_validation_error(self):
        """An action name outside the enum is a 400, not a KeyError."""
        with pytest.raises(ValidationError):
            get_descriptor("contact", "explode")

    def test_lookup_accepts_plain_strings(self):
        """Enum values work as lookup keys."""
        assert get_descriptor("deal", "searchByNameExact").method == "POST"

    def test_methods_match_inbound_verbs(self):
        """Upstream method follows the action kind."""
        for (_, action), descriptor in DESCRIPTORS.items():
            if action in (Action.LIST, Action.GET):
                assert descriptor.method == "GET"
            elif action == Action.DELETE:
                assert descriptor.method == "DELETE"
                assert not descriptor.requires_body
            elif action in (Action.UPDATE, Action.UPDATE_BY_EMAIL):
                assert descriptor.method == "PATCH"
                assert descriptor.requires_body
            else:
                assert descriptor.method == "POST"
                assert descriptor.requires_body


class TestQueryPrecedence:
    """Query merging: default < caller < fixed, repeated keys preserved."""

    def test_company_list_defaults(self):
        """An empty caller query gets both company list defaults."""
        descriptor = get_descriptor(ResourceType.COMPANY, Action.LIST)
        assert descriptor.build_query([]) == [("limit", "10"), ("archived", "false")]

    def test_caller_overrides_default(self):
        """A caller value replaces only the default for its own key."""
        descriptor = get_descriptor(ResourceType.COMPANY, Action.LIST)
        assert descriptor.build_query([("limit", "50")]) == [("archived", "false"), ("limit", "50")]

    def test_fixed_overrides_caller(self):
        """A fixed key replaces every caller value for that key."""
        descriptor = get_descriptor(ResourceType.CONTACT, Action.UPDATE_BY_EMAIL)
        query = [("idProperty", "hs_object_id"), ("idProperty", "id")]
        assert descriptor.build_query(query) == [("idProperty", "email")]

    def test_repeated_caller_keys_kept_in_order(self):
        """Repeated keys such as `properties` reach upstream with every value."""
        descriptor = get_descriptor(ResourceType.DEAL, Action.LIST)
        query = [("properties", "dealname"), ("properties", "amount"), ("limit", "2")]
        assert descriptor.build_query(query) == query

    def test_fixed_key_leaves_other_repeated_keys(self):
        """Fixed `properties` on contact get does not touch repeated `associations`."""
        descriptor = get_descriptor(ResourceType.CONTACT, Action.GET)
        query = [("associations", "deals"), ("properties", "email"), ("associations", "tickets")]
        assert descriptor.build_query(query) == [
            ("associations", "deals"),
            ("associations", "tickets"),
            ("properties", CONTACT_PROPERTIES),
        ]


class TestBodyTransforms:
    """Body validation and reshaping per action."""

    def test_properties_only_drops_other_keys(self):
        """Only `properties` survives the transform."""
        body = {"properties": {"firstname": "Ada"}, "associations": []}
        assert properties_only(body) == {"properties": {"firstname": "Ada"}}

    @pytest.mark.parametrize("body", [{"firstname": "Ada"}, {"properties": None}])
    def test_properties_only_requires_properties(self, body):
        """Absent or null `properties` is a local 400."""
        with pytest.raises(ValidationError) as exc_info:
            properties_only(body)
        assert exc_info.value.field == "properties"

    def test_deal_name_exact_body(self):
        """Exact-name search builds the fixed EQ filter body."""
        assert deal_name_exact({"name": "Acme"}) == {
            "filterGroups": [{
                "filters": [{"propertyName": "dealname", "operator": "EQ", "value": "Acme"}]
            }],
            "properties": ["dealname", "amount"],
            "limit": 5,
            "sorts": ["-createdate"],
        }

    def test_deal_name_contains_uses_name_part(self):
        """Contains search reads `namePart` and uses CONTAINS_TOKEN."""
        body = deal_name_contains({"namePart": "Acm"})
        assert body["filterGroups"][0]["filters"][0] == {
            "propertyName": "dealname",
            "operator": "CONTAINS_TOKEN",
            "value": "Acm",
        }

    @pytest.mark.parametrize("body", [{}, {"name": ""}, {"namePart": "Acme"}])
    def test_deal_name_exact_requires_name(self, body):
        """Missing or empty `name` is rejected before any upstream call."""
        with pytest.raises(ValidationError) as exc_info:
            deal_name_exact(body)
        assert exc_info.value.field == "name"
