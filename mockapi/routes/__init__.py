# Routes package init
"""
MockAPI — API Routes Package
=============================

What:  HTTP route handlers that accept requests and return JSON.

Route Inventory:
    - health.py:       GET  /api/health
    - products.py:     GET  /api/products              (filter, search, sort)
    - users.py:        GET  /api/users/{id}/posts
    - collections.py:  CRUD /api/{collection}[/{id}]   (json-server style)

Design Principle:
    Routes stay thin: extract parameters, fetch records from the injected
    store, call a service, return the result. Query logic lives in services.
"""
