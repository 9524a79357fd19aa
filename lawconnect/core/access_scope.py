"""Access Scope — role-based read filters shared by every list/get handler.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Returns equality filters only (field -> value), merged into EntityStore.find_many
    - Scope is a FILTER, not a permit/deny: rows outside it simply do not exist for the actor
      (single-item reads become NotFound, list reads become shorter)
    - Admin is never restricted

Design Decisions:
    - One function parameterized by (actor, kind) instead of per-handler role branching
    - Bid visibility for clients is gated by the case scope first (handler resolves the
      case through CASE_POST scope before listing its bids), so BID scope only narrows lawyers
"""

from typing import Any

from lawconnect.core.domain_types import Actor, CaseStatus, EntityKind, Role


def scope_filters(actor: Actor, kind: EntityKind) -> dict[str, Any]:
    """Equality filters restricting `kind` rows to what `actor` may read."""
    if actor.role == Role.ADMIN:
        return {}

    if kind == EntityKind.CASE_POST:
        if actor.role == Role.CLIENT:
            return {"client_id": actor.id}
        if actor.role == Role.LAWYER:
            return {"status": CaseStatus.OPEN.value}

    if kind == EntityKind.BID and actor.role == Role.LAWYER:
        return {"lawyer_id": actor.id}

    return {}


def scoped(
    actor: Actor, kind: EntityKind, filters: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge caller filters with the actor's scope. Scope wins on conflicting keys;
    callers passing arbitrary values check excluded_by_scope first."""
    merged = dict(filters or {})
    merged.update(scope_filters(actor, kind))
    return merged


def excluded_by_scope(
    actor: Actor, kind: EntityKind, filters: dict[str, Any],
) -> bool:
    """True when a caller filter contradicts the scope (no row can satisfy both)."""
    scope = scope_filters(actor, kind)
    return any(key in scope and scope[key] != value for key, value in filters.items())
