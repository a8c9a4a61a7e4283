# =============================================================================
# Shift Request Store
# =============================================================================

import logging
import uuid
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple, Union

from core.backends import Collection
from core.deadline import can_submit
from core.exceptions import ConflictError, DeadlineError, ValidationError
from core.utils import app_now, month_start_end, parse_date
from models.data_models import Actor, DeletedShift, Shift, ShiftDraft, TimeType

logger = logging.getLogger(__name__)

# (year, month) of the calendar page the request is made from
MonthRef = Tuple[int, int]

def new_id() -> str:
    return uuid.uuid4().hex

def parse_time_type(value: Union[TimeType, str]) -> TimeType:
    try:
        return TimeType(value)
    except ValueError:
        raise ValidationError(f"時間帯が正しくありません: {value}")

class ShiftStore:
    """
    Shift requests plus the history of deleted ones.

    Staff actors are gated by the request deadline of the viewed month,
    passed to every mutation as ``target_month`` (year, month). Callers with
    no viewed month fall back to the month of the shift's own date.
    Administrators bypass the gate. ``toggle`` reads then writes
    without a transaction, so two clients toggling the same tuple at the same
    moment can leave zero or two records. Last write wins.
    """

    def __init__(self, shifts: Collection, deleted: Collection,
                 clock: Callable[[], datetime] = app_now,
                 id_factory: Callable[[], str] = new_id):
        self.shifts = shifts
        self.deleted = deleted
        self.clock = clock
        self.id_factory = id_factory

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def all_shifts(self) -> List[Shift]:
        return [Shift.from_record(d["id"], d) for d in self.shifts.all()]

    def get(self, shift_id: str) -> Optional[Shift]:
        doc = self.shifts.get(shift_id)
        return Shift.from_record(doc["id"], doc) if doc else None

    def find(self, staff_id: str, day: Union[date, str], time_type: Union[TimeType, str]) -> Optional[Shift]:
        key = (parse_date(day), staff_id, parse_time_type(time_type))
        return next((s for s in self.all_shifts() if s.key == key), None)

    def shifts_for_date(self, day: Union[date, str]) -> List[Shift]:
        day = parse_date(day)
        return [s for s in self.all_shifts() if s.date == day]

    def shifts_for_month(self, year: int, month: int) -> List[Shift]:
        start, end = month_start_end(year, month)
        return [s for s in self.all_shifts() if start <= s.date <= end]

    def deleted_shifts(self) -> List[DeletedShift]:
        """Deletion history, newest first."""
        history = [DeletedShift.from_record(d["id"], d) for d in self.deleted.all()]
        return sorted(history, key=lambda d: d.deleted_at, reverse=True)

    def can_submit(self, actor: Actor, day: date, target_month: Optional[MonthRef] = None) -> bool:
        year, month = target_month or (day.year, day.month)
        return can_submit(actor.role, self.clock(), year, month)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def toggle(self, staff_id: str, day: Union[date, str], time_type: Union[TimeType, str],
               actor: Actor, target_month: Optional[MonthRef] = None) -> Optional[Shift]:
        """
        Remove the matching shift if one exists, otherwise create it.
        Returns the new shift, or None when the call removed one.
        """
        if not staff_id:
            raise ValidationError("スタッフを選択してください")
        day = parse_date(day)
        time_type = parse_time_type(time_type)
        self._check_deadline(actor, day, target_month)

        existing = self.find(staff_id, day, time_type)
        if existing:
            self._move_to_history(existing, actor)
            return None

        shift = Shift(
            id=self.id_factory(),
            staff_id=staff_id,
            date=day,
            time_type=time_type,
            notes=f"{time_type.label}勤務",
            created_by=actor.uid,
            created_at=self.clock(),
        )
        self.shifts.create(shift.id, shift.to_record())
        logger.info(f"Shift requested: {shift.date} {shift.staff_id} {shift.time_type.value} by {actor.uid}")
        return shift

    def add_detailed(self, draft: ShiftDraft, actor: Actor,
                     target_month: Optional[MonthRef] = None) -> Shift:
        """
        Insert a shift from the detailed-entry form.

        Unlike ``toggle`` this does not look for an identical
        (date, staff, slot) shift, so manual entry can create duplicates.
        """
        if draft.date is None:
            raise ValidationError("日付を選択してください")
        if not draft.staff_id:
            raise ValidationError("スタッフを選択してください")
        self._check_deadline(actor, draft.date, target_month)

        shift = Shift(
            id=self.id_factory(),
            staff_id=draft.staff_id,
            date=draft.date,
            time_type=draft.time_type,
            notes=draft.notes,
            created_by=actor.uid,
            created_at=self.clock(),
        )
        self.shifts.create(shift.id, shift.to_record())
        logger.info(f"Shift added: {shift.date} {shift.staff_id} {shift.time_type.value} by {actor.uid}")
        return shift

    def remove(self, shift_id: str, actor: Actor,
               target_month: Optional[MonthRef] = None) -> Optional[DeletedShift]:
        """Delete a shift into the history. Unknown ids are ignored."""
        shift = self.get(shift_id)
        if shift is None:
            return None
        self._check_deadline(actor, shift.date, target_month)
        return self._move_to_history(shift, actor)

    def restore(self, deleted: Union[DeletedShift, str], actor: Actor,
                target_month: Optional[MonthRef] = None) -> Shift:
        """Re-create a deleted shift under a fresh id and drop it from the history."""
        if isinstance(deleted, str):
            doc = self.deleted.get(deleted)
            if doc is None:
                raise ValidationError(f"削除履歴が見つかりません: {deleted}")
            deleted = DeletedShift.from_record(doc["id"], doc)

        snapshot = deleted.shift
        self._check_deadline(actor, snapshot.date, target_month)
        if self.find(snapshot.staff_id, snapshot.date, snapshot.time_type):
            raise ConflictError(
                f"{snapshot.date.isoformat()} の{snapshot.time_type.label}には既に同じスタッフの希望があります"
            )

        shift = snapshot.model_copy(update={
            "id": self.id_factory(),
            "restored_by": actor.uid,
            "restored_at": self.clock(),
        })
        self.shifts.create(shift.id, shift.to_record())
        self.deleted.delete(deleted.id)
        logger.info(f"Shift restored: {shift.date} {shift.staff_id} {shift.time_type.value} by {actor.uid}")
        return shift

    def subscribe(self, on_change: Callable[[List[Shift]], None]) -> Callable[[], None]:
        """Observe the shift collection; returns the unsubscribe handle."""
        return self.shifts.subscribe(
            lambda docs: on_change([Shift.from_record(d["id"], d) for d in docs])
        )

    def subscribe_deleted(self, on_change: Callable[[List[DeletedShift]], None]) -> Callable[[], None]:
        return self.deleted.subscribe(
            lambda docs: on_change([DeletedShift.from_record(d["id"], d) for d in docs])
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _check_deadline(self, actor: Actor, day: date, target_month: Optional[MonthRef]) -> None:
        if not self.can_submit(actor, day, target_month):
            raise DeadlineError("希望提出期限が過ぎています")

    def _move_to_history(self, shift: Shift, actor: Actor) -> DeletedShift:
        record = DeletedShift(
            id=self.id_factory(),
            shift=shift,
            deleted_at=self.clock(),
            deleted_by=actor.uid,
        )
        # snapshot is written before the shift is deleted
        self.deleted.create(record.id, record.to_record())
        self.shifts.delete(shift.id)
        logger.info(f"Shift removed: {shift.date} {shift.staff_id} {shift.time_type.value} by {actor.uid}")
        return record
