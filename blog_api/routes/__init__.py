# Routes package init
"""
Blog API: API Routes Package
===============================

Route Inventory:
    - posts.py:   GET/POST        /api/v1/posts
                  GET/PUT/DELETE  /api/v1/posts/{id}
    - health.py:  GET /           (welcome / liveness)
                  GET /health     (database connectivity)

Routes are THIN: extract request data, call the service, pick the status
code. Business rules live in `services/`.
"""
