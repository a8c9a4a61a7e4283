"""
Tabular views of shift requests: the month list, the per-staff summary and
CSV export.
"""
from typing import Callable, List

import pandas as pd

from models.constants import TIME_TYPES, WEEKDAY_LABELS
from models.data_models import Shift, StaffMember

SHIFT_COLUMNS = ["日付", "曜日", "スタッフ", "時間帯", "開始", "終了", "備考", "状態"]

def _weekday_label(shift: Shift) -> str:
    # WEEKDAY_LABELS starts on Sunday
    return WEEKDAY_LABELS[(shift.date.weekday() + 1) % 7]

def shifts_dataframe(shifts: List[Shift], name_of: Callable[[str], str]) -> pd.DataFrame:
    """One row per shift request, sorted by date, slot order and staff name."""
    slot_order = {key: i for i, key in enumerate(TIME_TYPES)}
    rows = []
    for shift in sorted(shifts, key=lambda s: (s.date, slot_order[s.time_type.value], name_of(s.staff_id))):
        rows.append({
            "日付": shift.date.isoformat(),
            "曜日": _weekday_label(shift),
            "スタッフ": name_of(shift.staff_id) or f"{shift.staff_id}（削除済み）",
            "時間帯": shift.time_type.label,
            "開始": shift.time_type.start,
            "終了": shift.time_type.end,
            "備考": shift.notes,
            "状態": shift.status,
        })
    return pd.DataFrame(rows, columns=SHIFT_COLUMNS)

def staff_summary(shifts: List[Shift], members: List[StaffMember]) -> pd.DataFrame:
    """Request counts per staff member and slot, with a total column."""
    labels = [t["label"] for t in TIME_TYPES.values()]
    counts = {m.id: {label: 0 for label in labels} for m in members}
    for shift in shifts:
        if shift.staff_id in counts:
            counts[shift.staff_id][shift.time_type.label] += 1

    df = pd.DataFrame(
        [counts[m.id] for m in members],
        index=pd.Index([m.name for m in members], name="スタッフ"),
        columns=labels,
    )
    df["合計"] = df.sum(axis=1)
    return df

def to_csv_bytes(df: pd.DataFrame) -> bytes:
    """CSV bytes, UTF-8 with BOM."""
    return df.to_csv(index=False).encode("utf-8-sig")
