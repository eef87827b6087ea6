# Services package init
"""
MockAPI — Services Layer
=========================

What:  Pure query logic sitting between routes (HTTP) and the collection store.
How:   Services accept plain lists of JSON records and return new lists.
       They never read the store or touch the request themselves.

Service Inventory:
    - product_query: filter + search + sort engine for GET /api/products
    - relations:     posts-by-user lookup and field-equality filtering
"""
