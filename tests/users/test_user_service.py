import pytest
from werkzeug.security import check_password_hash

from src.uniattend.uniattend.core.enums import Role, UserStatus
from src.uniattend.uniattend.core.exceptions import AuthorizationError, ValidationError


@pytest.fixture
def svc(container):
    return container.user_service


def test_create_account_hashes_password(store, svc):
    uid = svc.create_account(
        current_role=Role.ADMIN,
        unique_id="TEACH002",
        name="Teacher Two",
        password="secret99",
        role="teacher",
        department_id=store.cs_id,
    )

    user = svc.get(uid)
    assert user.role == Role.TEACHER
    assert user.status == UserStatus.ACTIVE
    assert user.password_hash != "secret99"
    assert check_password_hash(user.password_hash, "secret99")


def test_create_account_validation(svc):
    with pytest.raises(ValidationError, match="already exists"):
        svc.create_account(current_role=Role.ADMIN, unique_id="ADMIN001", name="X", password="secret99", role="admin")
    with pytest.raises(ValidationError, match="at least 6"):
        svc.create_account(current_role=Role.ADMIN, unique_id="NEW1", name="X", password="123", role="staff")
    with pytest.raises(ValidationError, match="Invalid role"):
        svc.create_account(current_role=Role.ADMIN, unique_id="NEW1", name="X", password="secret99", role="janitor")


def test_only_admin_manages_users(svc):
    with pytest.raises(AuthorizationError):
        svc.create_account(current_role=Role.HEAD, unique_id="NEW1", name="X", password="secret99", role="staff")


def test_update_keeps_password_unless_given(store, svc):
    before = store.users.get_by_id(store.staff_id).password_hash

    svc.update_account(current_role=Role.ADMIN, user_id=store.staff_id, name="Staff Renamed", role="staff", status="active")
    after = store.users.get_by_id(store.staff_id)
    assert after.name == "Staff Renamed"
    assert after.password_hash == before

    svc.update_account(
        current_role=Role.ADMIN, user_id=store.staff_id, name="Staff Renamed", role="staff", status="active", password="newpass1"
    )
    assert check_password_hash(store.users.get_by_id(store.staff_id).password_hash, "newpass1")


def test_admin_cannot_delete_self(store, svc):
    with pytest.raises(ValidationError):
        svc.delete_user(current_role=Role.ADMIN, current_user_id=store.admin_id, user_id=store.admin_id)

    svc.delete_user(current_role=Role.ADMIN, current_user_id=store.admin_id, user_id=store.staff_id)
    assert svc.get(store.staff_id) is None


def test_list_by_role_returns_active_users(store, svc):
    store.users.add("STAFF009", "staff123", Role.STAFF, status=UserStatus.BANNED)
    assert [u.unique_id for u in svc.list_by_role(Role.STAFF)] == ["STAFF001"]


def test_list_all_newest_first(svc):
    assert svc.list_all()[0].unique_id == "STAFF001"
