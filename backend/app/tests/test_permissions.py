"""
Unit tests for the role-based access gate.
"""

import pytest

from app.core.exceptions import Forbidden, Unauthenticated
from app.core.permissions import (
    ALL_ROLES,
    TOGGLE_MALL_ROLES,
    TOGGLE_STORE_ROLES,
    UPDATE_STORE_ROLES,
    authorize,
    resolve_role,
)
from app.models.user import UserRole
from app.schemas.user import CurrentUser


@pytest.mark.unit
class TestAuthorize:
    """Test permit/deny decisions."""

    def test_no_caller_is_unauthenticated(self):
        """Test that a missing caller is reported as unauthenticated."""
        with pytest.raises(Unauthenticated):
            authorize(None, ALL_ROLES)

    def test_allowed_role_is_permitted(self, admin):
        """Test that an allowed role passes and is returned."""
        assert authorize(admin, TOGGLE_MALL_ROLES) is UserRole.ADMIN

    @pytest.mark.parametrize(
        "role, allowed",
        [
            ("manager", TOGGLE_MALL_ROLES),
            ("store", TOGGLE_MALL_ROLES),
            ("admin", TOGGLE_STORE_ROLES),
            ("store", TOGGLE_STORE_ROLES),
            ("admin", UPDATE_STORE_ROLES),
            ("manager", UPDATE_STORE_ROLES),
        ],
    )
    def test_wrong_role_is_forbidden(self, role, allowed):
        """Test that each operation accepts only its own role."""
        with pytest.raises(Forbidden):
            authorize(CurrentUser(username=role, role=role), allowed)

    def test_unrecognized_role_is_forbidden(self):
        """Test that unknown roles are denied even for any-role operations."""
        with pytest.raises(Forbidden):
            authorize(CurrentUser(username="guest", role="guest"), ALL_ROLES)

    def test_forbidden_message_names_required_role(self, manager):
        """Test that the denial tells the caller which role is needed."""
        with pytest.raises(Forbidden) as exc_info:
            authorize(manager, TOGGLE_MALL_ROLES)
        assert "admin" in exc_info.value.detail

    def test_every_role_passes_all_roles(self):
        """Test that ALL_ROLES admits each recognized role."""
        for role in UserRole:
            assert authorize(CurrentUser(username="u", role=role.value), ALL_ROLES) is role


@pytest.mark.unit
def test_resolve_role():
    """Test role string resolution."""
    assert resolve_role("manager") is UserRole.MANAGER
    assert resolve_role("MANAGER") is None
    assert resolve_role("") is None
