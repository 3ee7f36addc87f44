"""
Role-based visibility policy for notice viewers.

This module holds the decision table that maps a viewer role to the broadcast
scopes it may see and the actions it may take. The table can be extended
without touching the visibility logic that consults it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Set

from noticeboard.utils.audiences import (
    ALL_BROADCAST_SCOPES,
    SCOPE_ALL,
    SCOPE_STAFF,
    SCOPE_TEACHER,
    SCOPE_STUDENT,
)
from noticeboard.utils.errors import UnknownRole

logger = logging.getLogger(__name__)

# Central role constants to ensure consistency across the codebase
ROLE_ADMIN = "Admin"
ROLE_TEACHER = "Teacher"
ROLE_STUDENT = "Student"
ROLE_ACCOUNTANT = "Accountant"
ROLE_LIBRARIAN = "Librarian"


@dataclass(frozen=True)
class RolePolicy:
    broadcast_scopes: FrozenSet[str]
    can_broadcast: bool = False
    can_moderate: bool = False


# Viewers outside the table (other staff, unknown roles) get this policy
RESTRICTED_POLICY = RolePolicy(broadcast_scopes=frozenset({SCOPE_ALL, SCOPE_STAFF}))

ROLE_POLICIES: Dict[str, RolePolicy] = {
    ROLE_ADMIN: RolePolicy(
        broadcast_scopes=ALL_BROADCAST_SCOPES,
        can_broadcast=True,
        can_moderate=True,
    ),
    ROLE_TEACHER: RolePolicy(broadcast_scopes=frozenset({SCOPE_ALL, SCOPE_STAFF, SCOPE_TEACHER})),
    ROLE_STUDENT: RolePolicy(broadcast_scopes=frozenset({SCOPE_ALL, SCOPE_STUDENT})),
    ROLE_ACCOUNTANT: RESTRICTED_POLICY,
    ROLE_LIBRARIAN: RESTRICTED_POLICY,
}

ALLOWED_ROLES = set(ROLE_POLICIES.keys())

# Roles that may see section-scoped notices; membership decides which ones
SECTION_ROLES: FrozenSet[str] = frozenset({ROLE_TEACHER, ROLE_STUDENT})


def get_role_policy(role: str) -> RolePolicy:
    """
    Get the policy for a given role.

    Args:
        role: The role name (Admin, Teacher, Student, Accountant, Librarian)

    Returns:
        The RolePolicy row for the role

    Raises:
        UnknownRole: If role is not in the decision table
    """
    if role not in ROLE_POLICIES:
        raise UnknownRole(role)
    return ROLE_POLICIES[role]


def resolve_role_policy(role: str) -> RolePolicy:
    """Return the policy for ``role``, falling back to the restricted row for unknown roles."""
    try:
        return get_role_policy(role)
    except UnknownRole:
        logger.debug("role_policy_fallback: role=%r", role)
        return RESTRICTED_POLICY


def get_broadcast_scopes(role: str) -> Set[str]:
    """Get the broadcast scopes a role may see (copy; unknown roles are restricted)."""
    return set(resolve_role_policy(role).broadcast_scopes)


def get_allowed_roles() -> Set[str]:
    """Get the set of roles named in the decision table."""
    return ALLOWED_ROLES.copy()


def validate_role(role: str) -> None:
    """
    Validate that a role is named in the decision table.

    Raises:
        UnknownRole: If role is not in the table
    """
    if role not in ALLOWED_ROLES:
        raise UnknownRole(role)


def role_allows_broadcast(role: str) -> bool:
    """Return True if the role may publish broadcast notices."""
    return resolve_role_policy(role).can_broadcast


def role_allows_moderation(role: str) -> bool:
    """Return True if the role may edit or delete notices it did not author."""
    return resolve_role_policy(role).can_moderate
