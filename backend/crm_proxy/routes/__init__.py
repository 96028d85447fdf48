# Routes package init
"""
CRM Proxy — API Routes Package
===============================

Route Inventory:
    - objects.py: /contacts, /deals, /companies, /tickets (generated from the
                  descriptor table in services/descriptors.py)
    - health.py:  GET /health

Routes are THIN: read the request, call the Forwarder, relay the result.
"""
