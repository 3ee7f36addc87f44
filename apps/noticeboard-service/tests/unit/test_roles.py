import pytest

from noticeboard.utils.errors import UnknownRole
from noticeboard.utils.roles import (
    RESTRICTED_POLICY,
    ROLE_POLICIES,
    get_allowed_roles,
    get_broadcast_scopes,
    get_role_policy,
    resolve_role_policy,
    role_allows_broadcast,
    role_allows_moderation,
    validate_role,
)


class TestRolePolicies:
    """Unit tests for the role decision table."""

    @pytest.mark.parametrize(
        "role,scopes",
        [
            ("Admin", {"All", "Staff", "Teacher", "Student"}),
            ("Teacher", {"All", "Staff", "Teacher"}),
            ("Student", {"All", "Student"}),
            ("Accountant", {"All", "Staff"}),
            ("Librarian", {"All", "Staff"}),
        ],
    )
    def test_broadcast_scopes_per_role(self, role, scopes):
        """Test that every table row grants exactly its scopes."""
        assert get_broadcast_scopes(role) == scopes

    def test_unknown_role_gets_restricted_scopes(self):
        """Test that roles outside the table fall back to All and Staff."""
        assert get_broadcast_scopes("Janitor") == {"All", "Staff"}
        assert get_broadcast_scopes(None) == {"All", "Staff"}
        assert resolve_role_policy("Janitor") is RESTRICTED_POLICY

    def test_get_role_policy_unknown_raises(self):
        with pytest.raises(UnknownRole, match="Unknown role: Janitor"):
            get_role_policy("Janitor")

    def test_get_broadcast_scopes_returns_copy(self):
        """Test that callers cannot modify the table through the returned set."""
        scopes = get_broadcast_scopes("Student")
        scopes.add("Staff")
        assert "Staff" not in ROLE_POLICIES["Student"].broadcast_scopes

    def test_only_admin_broadcasts_and_moderates(self):
        for role in get_allowed_roles():
            assert role_allows_broadcast(role) is (role == "Admin")
            assert role_allows_moderation(role) is (role == "Admin")
        assert role_allows_moderation("Janitor") is False

    def test_validate_role(self):
        for role in ["Admin", "Teacher", "Student", "Accountant", "Librarian"]:
            validate_role(role)
        with pytest.raises(ValueError):
            validate_role("admin")
