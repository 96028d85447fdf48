"""
CRM Proxy — Application Package Initializer
============================================

What: Marks the `crm_proxy` directory as a Python package.
Why:  Enables module imports like `from crm_proxy.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is a thin forwarding layer in front of the HubSpot CRM API:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Forwarder + Descriptor Table    │  ← request translation
    ├─────────────────────────────────────┤
    │        CRM Client (httpx)           │  ← one upstream call
    └─────────────────────────────────────┘

    Nothing is persisted. Every request is translated, forwarded once,
    and the upstream answer is relayed back unchanged.
"""

__version__ = "1.0.0"
