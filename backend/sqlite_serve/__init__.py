"""sqlite-serve — serve read-only SQLite queries through templates over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
