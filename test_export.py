#!/usr/bin/env python3
"""
Tests for the shift table, staff summary and CSV export.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from datetime import date

from core.export import SHIFT_COLUMNS, shifts_dataframe, staff_summary, to_csv_bytes
from models.data_models import Shift, StaffMember, TimeType

MEMBERS = [
    StaffMember(id="1", name="田中 花子", color="#3B82F6"),
    StaffMember(id="2", name="佐藤 太郎", color="#10B981"),
]
NAMES = {m.id: m.name for m in MEMBERS}

def shift(shift_id, staff_id, day, time_type, notes=""):
    return Shift(id=shift_id, staff_id=staff_id, date=day, time_type=time_type, notes=notes)

SHIFTS = [
    shift("a", "1", date(2025, 5, 12), TimeType.AFTERNOON),
    shift("b", "2", date(2025, 5, 11), TimeType.FULLDAY, "終日可"),
    shift("c", "1", date(2025, 5, 11), TimeType.MORNING),
    shift("d", "9", date(2025, 5, 12), TimeType.MORNING),
]

def test_shift_table_columns_and_order():
    df = shifts_dataframe(SHIFTS, lambda sid: NAMES.get(sid, ""))
    assert list(df.columns) == SHIFT_COLUMNS
    assert list(df["日付"]) == ["2025-05-11", "2025-05-11", "2025-05-12", "2025-05-12"]
    assert list(df["時間帯"]) == ["午前", "終日", "午前", "午後"]
    assert df.iloc[0]["曜日"] == "日"
    assert df.iloc[1]["備考"] == "終日可"
    assert df.iloc[1]["開始"] == "08:30"
    assert df.iloc[1]["終了"] == "17:30"

def test_deleted_staff_is_labelled():
    df = shifts_dataframe(SHIFTS, lambda sid: NAMES.get(sid, ""))
    assert "9（削除済み）" in list(df["スタッフ"])

def test_empty_table_keeps_columns():
    df = shifts_dataframe([], lambda sid: "")
    assert df.empty
    assert list(df.columns) == SHIFT_COLUMNS

def test_staff_summary_counts():
    summary = staff_summary(SHIFTS, MEMBERS)
    assert summary.index.name == "スタッフ"
    assert list(summary.columns) == ["午前", "午後", "終日", "合計"]
    assert summary.loc["田中 花子", "午前"] == 1
    assert summary.loc["田中 花子", "午後"] == 1
    assert summary.loc["田中 花子", "合計"] == 2
    assert summary.loc["佐藤 太郎", "終日"] == 1
    assert summary["合計"].sum() == 3

def test_csv_has_bom_and_header():
    data = to_csv_bytes(shifts_dataframe(SHIFTS, lambda sid: NAMES.get(sid, "")))
    assert data.startswith(b"\xef\xbb\xbf")
    header = data.decode("utf-8-sig").splitlines()[0]
    assert header == ",".join(SHIFT_COLUMNS)
