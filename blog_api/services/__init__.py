# Services package init
"""
Blog API: Services Layer
===========================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PostService: validation, id handling and CRUD for blog posts

Services raise application exceptions (ValidationError, NotFoundError,
DatabaseError) and never deal with status codes or response bodies.
"""
