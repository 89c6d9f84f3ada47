"""Core Layer — validated route types and the request pipeline; no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic given their injected capabilities

Design Decisions:
    - Functional core separated from imperative shell; effects arrive as Protocols
"""
