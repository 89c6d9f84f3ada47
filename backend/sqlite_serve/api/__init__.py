"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Configured routes mounted explicitly by the app factory (no auto-discovery)
    - Route handlers delegate to services/serve_route.py
"""
