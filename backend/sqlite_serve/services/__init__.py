"""Services Layer — route loading and per-request orchestration around the core.

Invariants:
    - Services own logging and HTTP mapping; the core stays silent
"""
