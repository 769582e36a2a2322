from datetime import date

import pytest

from src.uniattend.uniattend.core.enums import LeaveStatus, Role
from src.uniattend.uniattend.core.exceptions import AuthorizationError, ValidationError
from src.uniattend.uniattend.leaves.model import LEAVE_TRANSITIONS, can_transition


@pytest.fixture
def svc(container):
    return container.leave_service


@pytest.fixture
def staff(store, as_session_user):
    return as_session_user(store.staff_id)


@pytest.fixture
def head(store, as_session_user):
    return as_session_user(store.head_id)


@pytest.fixture
def pending_id(svc, staff):
    return svc.submit(requester=staff, from_date=date(2026, 3, 9), to_date=date(2026, 3, 11), reason="Family event")


def test_submit_creates_pending_request(svc, staff, pending_id):
    req = svc.list_by_requester(staff.id)[0]
    assert req.id == pending_id
    assert req.status == LeaveStatus.PENDING
    assert req.days == 3
    assert req.reviewer_id is None


def test_submit_rejects_inverted_range_and_blank_reason(svc, staff):
    with pytest.raises(ValidationError):
        svc.submit(requester=staff, from_date=date(2026, 3, 11), to_date=date(2026, 3, 9), reason="x")
    with pytest.raises(ValidationError):
        svc.submit(requester=staff, from_date=date(2026, 3, 9), to_date=date(2026, 3, 9), reason="   ")


def test_only_teachers_and_staff_can_submit(svc, head):
    with pytest.raises(AuthorizationError):
        svc.submit(requester=head, from_date=date(2026, 3, 9), to_date=date(2026, 3, 9), reason="x")


def test_reject_without_comments_is_a_silent_no_op(svc, head, pending_id):
    assert svc.reject(reviewer=head, request_id=pending_id, comments="   ") is None
    assert svc.reject(reviewer=head, request_id=pending_id) is None

    req = svc.list_pending()[0]
    assert req.id == pending_id
    assert req.status == LeaveStatus.PENDING
    assert req.reviewer_id is None


def test_reject_with_comments_stamps_reviewer(svc, head, pending_id):
    req = svc.reject(reviewer=head, request_id=pending_id, comments="Exam week")

    assert req.status == LeaveStatus.REJECTED
    assert req.reviewer_id == head.id
    assert req.reviewed_at is not None
    assert req.comments == "Exam week"


def test_approve_with_empty_comments_stores_null(svc, head, pending_id):
    req = svc.approve(reviewer=head, request_id=pending_id, comments="")
    assert req.status == LeaveStatus.APPROVED
    assert req.comments is None
    assert req.reviewer_id == head.id


def test_decided_request_cannot_be_decided_again(svc, head, pending_id):
    svc.approve(reviewer=head, request_id=pending_id)
    with pytest.raises(ValidationError):
        svc.reject(reviewer=head, request_id=pending_id, comments="changed my mind")


def test_only_heads_review(svc, staff, pending_id):
    with pytest.raises(AuthorizationError):
        svc.approve(reviewer=staff, request_id=pending_id)


def test_head_of_other_department_cannot_decide(store, svc, as_session_user, pending_id):
    other = store.departments.create(name="Physics", short_name="PHY")
    other_head = as_session_user(store.users.add("HEAD002", "head123", Role.HEAD, department_id=other))

    with pytest.raises(AuthorizationError):
        svc.approve(reviewer=other_head, request_id=pending_id)
    assert svc.pending_for_reviewer(other_head) == []


def test_cancel_only_by_requester_while_pending(store, svc, staff, head, as_session_user, pending_id):
    teacher = as_session_user(store.teacher_id)
    with pytest.raises(AuthorizationError):
        svc.cancel(requester=teacher, request_id=pending_id)

    cancelled = svc.cancel(requester=staff, request_id=pending_id)
    assert cancelled.status == LeaveStatus.CANCELLED

    with pytest.raises(ValidationError):
        svc.cancel(requester=staff, request_id=pending_id)
    with pytest.raises(ValidationError):
        svc.approve(reviewer=head, request_id=pending_id)


def test_missing_request(svc, head):
    with pytest.raises(ValidationError):
        svc.approve(reviewer=head, request_id=404)


def test_pending_for_reviewer_is_department_scoped(svc, head, staff, pending_id):
    assert [r.id for r in svc.pending_for_reviewer(head)] == [pending_id]
    assert [r.id for r in svc.list_pending_for_department(head.department_id)] == [pending_id]


def test_status_counts(svc, head, staff, pending_id):
    second = svc.submit(requester=staff, from_date=date(2026, 4, 1), to_date=date(2026, 4, 1), reason="Clinic")
    svc.approve(reviewer=head, request_id=second)

    counts = svc.status_counts(svc.list_by_requester(staff.id))
    assert counts == {"pending": 1, "approved": 1, "rejected": 0, "cancelled": 0}


def test_terminal_states_have_no_transitions():
    assert can_transition(LeaveStatus.PENDING, LeaveStatus.APPROVED)
    for status in (LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED):
        assert LEAVE_TRANSITIONS[status] == frozenset()
        assert not can_transition(status, LeaveStatus.PENDING)
