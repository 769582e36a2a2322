import pytest

from src.uniattend.uniattend.core.constants import SESSION_USER_KEY
from src.uniattend.uniattend.core.enums import AttendanceStatus, LeaveStatus

CREDENTIALS = {
    "admin": ("ADMIN001", "admin123"),
    "head": ("HEAD001", "head123"),
    "hr": ("HR001", "hr123456"),
    "moderator": ("MOD001", "mod123456"),
    "teacher": ("TEACH001", "teacher123"),
    "staff": ("STAFF001", "staff123"),
}


def test_root_redirects_anonymous_user_to_login(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_login_success_redirects_to_dashboard(client, login):
    resp = login(*CREDENTIALS["admin"])
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")

    page = client.get("/dashboard")
    assert page.status_code == 200
    assert b"Administration" in page.data


def test_login_failure_shows_generic_message(client, login):
    resp = login("ADMIN001", "nope")
    assert resp.status_code == 200
    assert b"Invalid credentials" in resp.data


def test_login_with_store_down_shows_error(store, client, login):
    store.users.fail = True
    resp = login(*CREDENTIALS["admin"])
    assert resp.status_code == 200
    assert b"Database connection failed" in resp.data


def test_session_never_holds_password_hash(client, login):
    login(*CREDENTIALS["staff"])
    with client.session_transaction() as sess:
        assert "password_hash" not in sess[SESSION_USER_KEY]


def test_disallowed_destination_renders_403(client, login):
    login(*CREDENTIALS["staff"])
    resp = client.get("/user-management")
    assert resp.status_code == 403
    assert b"No access" in resp.data


def test_unknown_path_renders_404(client, login):
    login(*CREDENTIALS["staff"])
    resp = client.get("/payroll/reports")
    assert resp.status_code == 404
    assert b"Page not found" in resp.data


def test_screens_require_login(client):
    resp = client.get("/attendance")
    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]


def test_logout_clears_session(client, login):
    login(*CREDENTIALS["teacher"])
    client.get("/logout")
    with client.session_transaction() as sess:
        assert SESSION_USER_KEY not in sess
    assert client.get("/dashboard").status_code == 302


@pytest.mark.parametrize("who", list(CREDENTIALS))
def test_every_role_dashboard_renders(client, login, who):
    login(*CREDENTIALS[who])
    assert client.get("/dashboard").status_code == 200


@pytest.mark.parametrize(
    "who,path",
    [
        ("admin", "/user-management"),
        ("admin", "/academic/class"),
        ("admin", "/academic/schedule"),
        ("admin", "/configuration/department"),
        ("admin", "/configuration/major"),
        ("admin", "/configuration/subject"),
        ("head", "/leave-requests"),
        ("head", "/attendance"),
        ("teacher", "/leave-requests"),
        ("staff", "/attendance"),
        ("hr", "/check-attendance"),
        ("moderator", "/check-attendance"),
    ],
)
def test_allowed_screens_render(client, login, who, path):
    login(*CREDENTIALS[who])
    assert client.get(path).status_code == 200


def test_sidebar_only_lists_allowed_destinations(client, login):
    login(*CREDENTIALS["staff"])
    page = client.get("/dashboard").data
    assert b'href="/leave-requests"' in page
    assert b'href="/user-management"' not in page


def test_hr_marks_staff_attendance(store, client, login):
    login(*CREDENTIALS["hr"])
    resp = client.post(
        "/check-attendance",
        data={"user_id": store.staff_id, "date": "2026-03-02", "status": "late", "notes": "traffic"},
    )
    assert resp.status_code == 302

    records = store.attendance.list_for_user(store.staff_id)
    assert len(records) == 1
    assert records[0].status == AttendanceStatus.LATE


def test_admin_creates_department_via_form(store, client, login):
    login(*CREDENTIALS["admin"])
    client.post("/configuration/department/create", data={"name": "Physics", "short_name": "PHY"})

    page = client.get("/configuration/department")
    assert b"Physics" in page.data


def test_leave_round_trip_through_screens(store, client, login):
    login(*CREDENTIALS["staff"])
    client.post("/leave-requests", data={"from_date": "2026-03-09", "to_date": "2026-03-10", "reason": "Moving house"})
    client.get("/logout")

    login(*CREDENTIALS["head"])
    (request_id,) = [r.id for r in store.leaves.list_by_status(LeaveStatus.PENDING)]

    client.post(f"/leave-requests/{request_id}/reject", data={"comments": ""})
    assert store.leaves.get_by_id(request_id).status == LeaveStatus.PENDING

    client.post(f"/leave-requests/{request_id}/reject", data={"comments": "Audit week"})
    assert store.leaves.get_by_id(request_id).status == LeaveStatus.REJECTED
