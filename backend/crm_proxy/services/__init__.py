# Services package init
"""
CRM Proxy — Services Layer
===========================

Service Inventory:
    - credentials: Bearer token normalization (one policy for every route)
    - descriptors: Per-resource/per-action table driving every endpoint
    - CRMClient (abstract): Outbound HTTP contract
    - HubSpotClient: httpx implementation of CRMClient
    - Forwarder: Builds one upstream call from one inbound request
"""
