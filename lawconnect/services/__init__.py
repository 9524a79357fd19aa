"""Services Layer — request handlers and the aggregate recompute engine.

Invariants:
    - Every write follows: pure check (core/enforce_*) -> store mutation -> recompute
    - One handler class per entity, each bound to a single AsyncSession

Design Decisions:
    - One handler file per entity for locality (no god objects)
"""
