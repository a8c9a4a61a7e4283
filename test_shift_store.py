#!/usr/bin/env python3
"""
Tests for the shift request store: toggle, detailed entry, removal,
restore and the deadline gate.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import itertools
from datetime import date, datetime

import pytest

from core.backends import MemoryCollection
from core.exceptions import ConflictError, DeadlineError, ValidationError
from core.shift_store import ShiftStore
from models.data_models import Actor, Role, ShiftDraft, TimeType

BEFORE_DEADLINE = datetime(2025, 4, 20, 9, 0)
AFTER_DEADLINE = datetime(2025, 4, 27, 9, 0)

STAFF = Actor(uid="anon-staff", role=Role.STAFF)
ADMIN = Actor(uid="anon-admin", role=Role.ADMIN)

def make_store(now: datetime = BEFORE_DEADLINE) -> ShiftStore:
    counter = itertools.count(1)
    return ShiftStore(
        MemoryCollection("shifts"),
        MemoryCollection("deletedShifts"),
        clock=lambda: now,
        id_factory=lambda: f"id{next(counter)}",
    )

# -----------------------------------------------------------------------------
# toggle
# -----------------------------------------------------------------------------

def test_toggle_creates_requested_shift_with_slot_notes():
    store = make_store()
    shift = store.toggle("1", "2025-05-10", "morning", STAFF)

    assert shift is not None
    assert shift.date == date(2025, 5, 10)
    assert shift.time_type == TimeType.MORNING
    assert shift.notes == "午前勤務"
    assert shift.status == "requested"
    assert shift.created_by == "anon-staff"
    assert store.get(shift.id) == shift

def test_toggle_twice_leaves_no_shift():
    store = make_store()
    store.toggle("1", "2025-05-10", "morning", STAFF)
    assert store.toggle("1", "2025-05-10", "morning", STAFF) is None

    assert store.find("1", "2025-05-10", "morning") is None
    assert store.all_shifts() == []
    assert len(store.deleted_shifts()) == 1

def test_toggle_parity():
    for count in range(1, 7):
        store = make_store()
        for _ in range(count):
            store.toggle("2", date(2025, 5, 14), TimeType.AFTERNOON, STAFF)
        matching = [s for s in store.all_shifts() if s.key == (date(2025, 5, 14), "2", TimeType.AFTERNOON)]
        assert len(matching) == count % 2

def test_toggle_tuples_are_independent():
    store = make_store()
    store.toggle("1", "2025-05-10", "morning", STAFF)
    store.toggle("1", "2025-05-10", "afternoon", STAFF)
    store.toggle("2", "2025-05-10", "morning", STAFF)

    assert len(store.shifts_for_date("2025-05-10")) == 3
    assert store.toggle("1", "2025-05-10", "afternoon", STAFF) is None
    assert len(store.shifts_for_date(date(2025, 5, 10))) == 2

def test_toggle_rejects_unknown_slot_and_empty_staff():
    store = make_store()
    with pytest.raises(ValidationError):
        store.toggle("1", "2025-05-10", "night", STAFF)
    with pytest.raises(ValidationError):
        store.toggle("", "2025-05-10", "morning", STAFF)

# -----------------------------------------------------------------------------
# add_detailed
# -----------------------------------------------------------------------------

def test_add_detailed_requires_date():
    store = make_store()
    with pytest.raises(ValidationError):
        store.add_detailed(ShiftDraft(staff_id="1"), STAFF)

def test_add_detailed_keeps_notes():
    store = make_store()
    draft = ShiftDraft(staff_id="3", date=date(2025, 5, 20), time_type=TimeType.FULLDAY, notes="午後は通院")
    shift = store.add_detailed(draft, STAFF)

    assert shift.notes == "午後は通院"
    assert shift.status == "requested"
    assert shift.time_range == "08:30-17:30"

def test_add_detailed_does_not_deduplicate_unlike_toggle():
    store = make_store()
    store.toggle("1", "2025-05-10", "morning", STAFF)
    store.add_detailed(ShiftDraft(staff_id="1", date=date(2025, 5, 10), time_type=TimeType.MORNING), STAFF)

    matching = [s for s in store.all_shifts() if s.key == (date(2025, 5, 10), "1", TimeType.MORNING)]
    assert len(matching) == 2

# -----------------------------------------------------------------------------
# remove / restore
# -----------------------------------------------------------------------------

def test_remove_unknown_id_is_noop():
    store = make_store()
    store.toggle("1", "2025-05-10", "morning", STAFF)
    assert store.remove("missing", STAFF) is None
    assert len(store.all_shifts()) == 1
    assert store.deleted_shifts() == []

def test_remove_moves_shift_to_history():
    store = make_store()
    shift = store.toggle("1", "2025-05-10", "morning", STAFF)
    record = store.remove(shift.id, ADMIN)

    assert store.all_shifts() == []
    assert record.shift == shift
    assert record.deleted_by == "anon-admin"
    assert record.deleted_at == BEFORE_DEADLINE
    assert store.deleted_shifts() == [record]

def test_restore_reinserts_with_fresh_id():
    store = make_store()
    shift = store.toggle("1", "2025-05-10", "morning", STAFF)
    record = store.remove(shift.id, STAFF)

    restored = store.restore(record, ADMIN)
    assert restored.id != shift.id
    assert restored.key == shift.key
    assert restored.restored_by == "anon-admin"
    assert store.deleted_shifts() == []
    assert store.find("1", "2025-05-10", "morning") == restored

def test_restore_by_history_id():
    store = make_store()
    shift = store.toggle("1", "2025-05-10", "morning", STAFF)
    record = store.remove(shift.id, STAFF)
    assert store.restore(record.id, STAFF).key == shift.key

def test_restore_conflict_keeps_history():
    store = make_store()
    store.toggle("1", "2025-05-10", "morning", STAFF)
    store.toggle("1", "2025-05-10", "morning", STAFF)
    store.toggle("1", "2025-05-10", "morning", STAFF)
    record = store.deleted_shifts()[0]

    with pytest.raises(ConflictError):
        store.restore(record, ADMIN)
    assert store.deleted_shifts() == [record]
    assert len(store.all_shifts()) == 1

def test_restore_then_remove_reproduces_record():
    store = make_store()
    shift = store.add_detailed(
        ShiftDraft(staff_id="4", date=date(2025, 5, 21), time_type=TimeType.AFTERNOON, notes="検診後"), STAFF,
    )
    first = store.remove(shift.id, STAFF)

    restored = store.restore(first, STAFF)
    again = store.remove(restored.id, STAFF)

    # restored_by is an audit field the restore adds, like the timestamps
    audit = {"id", "created_at", "restored_at", "restored_by"}
    assert again.id != first.id
    assert again.shift.restored_by == "anon-staff"
    assert again.model_dump(exclude={"id": True, "deleted_at": True, "shift": audit}) == \
        first.model_dump(exclude={"id": True, "deleted_at": True, "shift": audit})

# -----------------------------------------------------------------------------
# deadline gate
# -----------------------------------------------------------------------------

def test_staff_rejected_after_deadline():
    store = make_store(AFTER_DEADLINE)
    with pytest.raises(DeadlineError):
        store.toggle("1", "2025-05-10", "morning", STAFF)
    with pytest.raises(DeadlineError):
        store.add_detailed(ShiftDraft(staff_id="1", date=date(2025, 5, 10)), STAFF)
    assert store.all_shifts() == []

def test_admin_bypasses_deadline():
    store = make_store(AFTER_DEADLINE)
    shift = store.toggle("1", "2025-05-10", "morning", ADMIN)
    assert shift is not None

    with pytest.raises(DeadlineError):
        store.remove(shift.id, STAFF)
    assert store.remove(shift.id, ADMIN) is not None

    with pytest.raises(DeadlineError):
        store.restore(store.deleted_shifts()[0], STAFF)
    assert store.restore(store.deleted_shifts()[0], ADMIN).key == shift.key

def test_gate_without_viewed_month_uses_month_of_the_shift():
    store = make_store(AFTER_DEADLINE)
    # June requests stay open until May 26
    assert store.toggle("1", "2025-06-02", "fullday", STAFF) is not None
    with pytest.raises(DeadlineError):
        store.add_detailed(ShiftDraft(staff_id="1", date=date(2025, 5, 30)), STAFF)

def test_gate_follows_viewed_month():
    store = make_store(AFTER_DEADLINE)
    june, may = (2025, 6), (2025, 5)
    assert store.can_submit(STAFF, date(2025, 5, 30), june) is True

    shift = store.add_detailed(ShiftDraft(staff_id="1", date=date(2025, 5, 30)), STAFF, target_month=june)
    assert shift.date == date(2025, 5, 30)
    record = store.remove(shift.id, STAFF, target_month=june)
    assert store.restore(record, STAFF, target_month=june).key == shift.key

    # viewing the closed month locks even a date in the open one
    with pytest.raises(DeadlineError):
        store.toggle("1", "2025-06-02", "fullday", STAFF, target_month=may)
    assert store.toggle("1", "2025-06-02", "fullday", ADMIN, target_month=may) is not None

# -----------------------------------------------------------------------------
# queries and subscription
# -----------------------------------------------------------------------------

def test_shifts_for_month():
    store = make_store()
    store.toggle("1", "2025-05-01", "morning", ADMIN)
    store.toggle("1", "2025-05-31", "morning", ADMIN)
    store.toggle("1", "2025-06-01", "morning", ADMIN)
    assert [s.date.day for s in store.shifts_for_month(2025, 5)] == [1, 31]

def test_subscribe_and_unsubscribe():
    store = make_store()
    seen = []
    unsubscribe = store.subscribe(lambda shifts: seen.append(len(shifts)))
    assert seen == [0]

    store.toggle("1", "2025-05-10", "morning", STAFF)
    assert seen == [0, 1]

    unsubscribe()
    store.toggle("1", "2025-05-11", "morning", STAFF)
    assert seen == [0, 1]

def test_subscribe_deleted():
    store = make_store()
    seen = []
    store.subscribe_deleted(lambda history: seen.append([d.shift.staff_id for d in history]))
    shift = store.toggle("3", "2025-05-10", "morning", STAFF)
    store.remove(shift.id, STAFF)
    assert seen[-1] == ["3"]
