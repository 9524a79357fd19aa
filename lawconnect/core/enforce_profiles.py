"""Lawyer Profile Enforcement — owner role, edit rights, completeness flag.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - A profile's user must have role=lawyer, on create AND on every update
    - is_profile_complete is recomputed on every write, never taken from input

Design Decisions:
    - compute_profile_complete takes the five fields explicitly instead of the ORM
      row, so the same function serves create (payload) and update (merged row)
"""

from typing import Sequence
from uuid import UUID

from lawconnect.core.domain_types import Actor, Role
from lawconnect.core.errors import (
    DuplicateProfileError,
    ForbiddenError,
    OnlyLawyersHaveProfilesError,
)


def check_profile_owner_role(target_role: str | None) -> OnlyLawyersHaveProfilesError | None:
    """`target_role` is the role of the user the profile belongs to (None = no such user)."""
    if target_role != Role.LAWYER:
        return OnlyLawyersHaveProfilesError()
    return None


def check_can_edit_profile(actor: Actor, profile_user_id: UUID) -> ForbiddenError | None:
    if actor.role != Role.ADMIN and actor.id != profile_user_id:
        return ForbiddenError("Not authorized to modify this profile")
    return None


def check_no_duplicate_profile(existing_profile: object | None) -> DuplicateProfileError | None:
    if existing_profile is not None:
        return DuplicateProfileError()
    return None


def validate_profile_creation(
    actor: Actor, profile_user_id: UUID, target_role: str | None,
    existing_profile: object | None,
) -> ForbiddenError | DuplicateProfileError | None:
    return (
        check_can_edit_profile(actor, profile_user_id)
        or check_profile_owner_role(target_role)
        or check_no_duplicate_profile(existing_profile)
    )


def validate_profile_update(
    actor: Actor, profile_user_id: UUID, target_role: str | None,
    sets_verified: bool = False,
) -> ForbiddenError | None:
    return (
        check_can_edit_profile(actor, profile_user_id)
        or check_profile_owner_role(target_role)
        or check_can_verify(actor, sets_verified)
    )


def compute_profile_complete(
    bio: str | None,
    specializations: Sequence | None,
    experience: float | None,
    education: Sequence | None,
    languages: Sequence | None,
) -> bool:
    """True iff bio, specializations, experience, education and languages are all present."""
    return bool(
        bio
        and specializations
        and experience is not None
        and education
        and languages
    )


def check_can_verify(actor: Actor, sets_verified: bool) -> ForbiddenError | None:
    """Verification is an admin decision; lawyers cannot vouch for themselves."""
    if sets_verified and actor.role != Role.ADMIN:
        return ForbiddenError("Only admins can verify lawyers", "ONLY_ADMINS_CAN_VERIFY")
    return None
