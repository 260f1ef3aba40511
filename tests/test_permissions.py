import pytest

from database.models import User
from enums.user_role import UserRole
from utils.exceptions import Forbidden, OwnerPending
from utils.permissions import (
    authorize,
    ownership_check,
    require_owner_approved,
    require_resource_ownership,
    require_role,
    role_check,
)


def user(user_id=1, role="renter", approved=True):
    return User(id=user_id, name="U", email=f"u{user_id}@x.com", role=role, is_approved=approved)


def test_require_role_accepts_listed_role():
    require_role(user(role="owner"), [UserRole.OWNER, UserRole.ADMIN])


def test_require_role_rejects_other_roles():
    with pytest.raises(Forbidden) as exc:
        require_role(user(role="renter"), [UserRole.OWNER, UserRole.ADMIN])
    assert "Required roles: owner, admin" in exc.value.message


def test_pending_owner_is_stopped():
    with pytest.raises(OwnerPending):
        require_owner_approved(user(role="owner", approved=False))


@pytest.mark.parametrize("role", ["renter", "admin"])
def test_approval_only_applies_to_owners(role):
    require_owner_approved(user(role=role, approved=False))


def test_ownership_allows_owner_and_admin():
    require_resource_ownership(user(user_id=7, role="owner"), 7)
    require_resource_ownership(user(user_id=8, role="admin"), 7)


def test_ownership_rejects_other_user():
    with pytest.raises(Forbidden):
        require_resource_ownership(user(user_id=8, role="owner"), 7)


def test_missing_resource_owner_only_passes_for_admin():
    require_resource_ownership(user(role="admin"), None)
    with pytest.raises(Forbidden):
        require_resource_ownership(user(role="owner"), None)


def test_authorize_short_circuits_on_first_failure():
    calls = []

    def record(identity):
        calls.append(identity.id)

    pending_owner = user(user_id=3, role="owner", approved=False)
    with pytest.raises(OwnerPending):
        authorize(
            pending_owner,
            role_check(UserRole.OWNER),
            require_owner_approved,
            ownership_check(99),
            record,
        )
    assert calls == []


def test_authorize_reports_role_before_ownership():
    with pytest.raises(Forbidden) as exc:
        authorize(
            user(role="renter"),
            role_check(UserRole.OWNER, message="owners only"),
            ownership_check(1, message="not yours"),
        )
    assert exc.value.message == "owners only"
