from datetime import date

import pytest

from src.hrms_portal.hrms_portal.core.enums import LeaveStatus, Role
from src.hrms_portal.hrms_portal.core.exceptions import AuthorizationError, ValidationError
from src.hrms_portal.hrms_portal.leaves.service import LeaveService


class InMemoryLeaves:
    def __init__(self, items=None):
        self.items = list(items or [])
        self.applied = []
        self.decisions = []

    def my_leaves(self):
        return list(self.items)

    def apply(self, payload):
        self.applied.append(payload)
        return {"id": 99, **payload}

    def all_leaves(self):
        return list(self.items)

    def approve(self, leave_id):
        self.decisions.append((leave_id, "approve"))

    def reject(self, leave_id):
        self.decisions.append((leave_id, "reject"))

    def reports(self):
        return {"total": len(self.items)}


ITEMS = [
    {"id": 1, "start_date": "2025-02-03T00:00:00", "end_date": "2025-02-04T23:59:59", "reason": "Trip", "status": "approved"},
    {"id": 2, "start_date": "2025-03-10T00:00:00", "end_date": "2025-03-10T23:59:59", "reason": "Doctor", "status": "PENDING", "user": {"name": "An"}},
    {"id": 3, "start_date": None, "end_date": None, "reason": "", "status": "unknown"},
]


def test_apply_covers_whole_days():
    repo = InMemoryLeaves()

    LeaveService(repo).apply(start_date=date(2025, 3, 10), end_date=date(2025, 3, 12), reason="  Family  ")

    assert repo.applied == [
        {"start_date": "2025-03-10T00:00:00", "end_date": "2025-03-12T23:59:59", "reason": "Family"}
    ]


def test_apply_single_day_is_allowed():
    repo = InMemoryLeaves()
    LeaveService(repo).apply(start_date=date(2025, 3, 10), end_date=date(2025, 3, 10), reason="x")
    assert len(repo.applied) == 1


def test_apply_rejects_end_before_start():
    repo = InMemoryLeaves()
    with pytest.raises(ValidationError):
        LeaveService(repo).apply(start_date=date(2025, 3, 10), end_date=date(2025, 3, 9), reason="x")
    assert repo.applied == []


def test_apply_requires_reason():
    with pytest.raises(ValidationError) as exc:
        LeaveService(InMemoryLeaves()).apply(start_date=date(2025, 3, 10), end_date=date(2025, 3, 10), reason=" ")
    assert str(exc.value) == "Reason is required"


def test_my_leaves_parses_status_and_dates():
    leaves = LeaveService(InMemoryLeaves(ITEMS)).my_leaves()

    assert leaves[0].status == LeaveStatus.APPROVED
    assert leaves[0].end_date == date(2025, 2, 4)
    assert leaves[1].status == LeaveStatus.PENDING
    assert leaves[1].user_name == "An"
    assert leaves[2].status == LeaveStatus.PENDING
    assert leaves[2].start_date is None


def test_to_ui_css_class():
    leaves = LeaveService(InMemoryLeaves(ITEMS)).my_leaves()

    ui = [LeaveService.to_ui(r) for r in leaves]

    assert ui[0]["css_class"] == "bg-green-100 text-green-800"
    assert ui[1]["css_class"] == "bg-yellow-100 text-yellow-800"
    assert ui[2]["start_date"] == "-"
    assert ui[2]["user_name"] == "-"


def test_pending_filter_for_admin():
    svc = LeaveService(InMemoryLeaves(ITEMS))
    assert [r.id for r in svc.pending(current_role=Role.ADMIN)] == [2, 3]


@pytest.mark.parametrize("status, action", [(LeaveStatus.APPROVED, "approve"), (LeaveStatus.REJECTED, "reject")])
def test_decide(status, action):
    repo = InMemoryLeaves(ITEMS)
    LeaveService(repo).decide(current_role=Role.SUPER_ADMIN, leave_id=2, status=status)
    assert repo.decisions == [(2, action)]


def test_decide_pending_is_not_a_decision():
    with pytest.raises(ValidationError):
        LeaveService(InMemoryLeaves(ITEMS)).decide(current_role=Role.ADMIN, leave_id=2, status=LeaveStatus.PENDING)


def test_plain_user_cannot_use_admin_operations():
    svc = LeaveService(InMemoryLeaves(ITEMS))

    with pytest.raises(AuthorizationError):
        svc.all_leaves(current_role=Role.USER)
    with pytest.raises(AuthorizationError):
        svc.decide(current_role=Role.USER, leave_id=1, status=LeaveStatus.APPROVED)
    with pytest.raises(AuthorizationError):
        svc.reports(current_role=Role.USER)
