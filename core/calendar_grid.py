# =============================================================================
# Month Calendar Grid
# =============================================================================

from datetime import date, timedelta
from typing import Callable, Iterator, List, Optional

from core.utils import month_start_end
from models.data_models import DayCell, DayKind

HolidayLookup = Callable[[date], Optional[str]]

def classify_day(day: date, holiday_name: Optional[str] = None) -> DayKind:
    """Holiday beats Sunday/Saturday, which beat weekday."""
    if holiday_name:
        return DayKind.HOLIDAY
    if day.weekday() == 6:
        return DayKind.SUNDAY
    if day.weekday() == 5:
        return DayKind.SATURDAY
    return DayKind.WEEKDAY

def sunday_on_or_before(day: date) -> date:
    # weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)

class CalendarMonth:
    """
    Day cells for one month, starting on the Sunday on or before the 1st.

    Only leading padding from the previous month is produced; the sequence
    ends on the last day of the month. Iterating again restarts it.
    """

    def __init__(self, year: int, month: int, holiday_lookup: Optional[HolidayLookup] = None):
        self.first_day, self.last_day = month_start_end(year, month)
        self.year = year
        self.month = month
        self.holiday_lookup = holiday_lookup or (lambda d: None)

    def __iter__(self) -> Iterator[DayCell]:
        return self.days()

    def __len__(self) -> int:
        return (self.last_day - sunday_on_or_before(self.first_day)).days + 1

    def days(self) -> Iterator[DayCell]:
        d = sunday_on_or_before(self.first_day)
        while d <= self.last_day:
            name = self.holiday_lookup(d)
            yield DayCell(
                date=d,
                is_current_month=(d.month == self.month),
                kind=classify_day(d, name),
                holiday_name=name,
            )
            d += timedelta(days=1)

    def weeks(self) -> List[List[DayCell]]:
        """Rows of seven cells; the last row may be shorter."""
        cells = list(self.days())
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]

def calendar_days(year: int, month: int, holiday_lookup: Optional[HolidayLookup] = None) -> CalendarMonth:
    return CalendarMonth(year, month, holiday_lookup)
