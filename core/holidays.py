# =============================================================================
# Holiday Registry
# =============================================================================

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Union

import jpholiday

from core.backends import Collection
from core.exceptions import AuthorizationError, ValidationError
from core.utils import date_range, month_start_end, parse_date
from models.data_models import Actor, CustomHoliday

logger = logging.getLogger(__name__)

class HolidayRegistry:
    """
    Built-in Japanese public holidays merged with user-added custom holidays.
    Custom entries take precedence over the built-in name for the same date.
    """

    def __init__(self, collection: Collection,
                 builtin_lookup: Callable[[date], Optional[str]] = jpholiday.is_holiday_name):
        self.collection = collection
        self.builtin_lookup = builtin_lookup

    def custom_holidays(self) -> List[CustomHoliday]:
        return [CustomHoliday.from_record(d["id"], d) for d in self.collection.all()]

    def custom_map(self) -> Dict[date, str]:
        return {h.date: h.name for h in self.custom_holidays()}

    def holiday_name(self, day: Union[date, str]) -> Optional[str]:
        """Custom name, else built-in name, else None."""
        day = parse_date(day)
        custom = self.custom_map().get(day)
        if custom:
            return custom
        return self.builtin_lookup(day)

    def lookup(self) -> Callable[[date], Optional[str]]:
        """A holiday_name function over one snapshot of the custom table."""
        custom = self.custom_map()

        def _lookup(day: date) -> Optional[str]:
            return custom.get(day) or self.builtin_lookup(day)

        return _lookup

    def holidays_in_month(self, year: int, month: int) -> Dict[date, str]:
        start, end = month_start_end(year, month)
        name_of = self.lookup()
        result = {}
        for d in date_range(start, end):
            name = name_of(d)
            if name:
                result[d] = name
        return result

    def add_custom(self, day: Union[date, str, None], name: Optional[str],
                   actor: Optional[Actor] = None) -> CustomHoliday:
        """Add or rename a custom holiday."""
        self._check_admin(actor)
        if not name or not name.strip():
            raise ValidationError("祝日名を入力してください")
        day = parse_date(day)
        holiday = CustomHoliday(id=day.isoformat(), date=day, name=name.strip())
        self.collection.create(holiday.id, holiday.to_record())
        logger.info(f"Custom holiday set: {holiday.id} {holiday.name}")
        return holiday

    def remove_custom(self, day: Union[date, str], actor: Optional[Actor] = None) -> None:
        self._check_admin(actor)
        day = parse_date(day)
        self.collection.delete(day.isoformat())
        logger.info(f"Custom holiday removed: {day.isoformat()}")

    def subscribe(self, on_change):
        return self.collection.subscribe(on_change)

    @staticmethod
    def _check_admin(actor: Optional[Actor]) -> None:
        if actor is not None and not actor.is_admin:
            raise AuthorizationError("祝日の設定は管理者のみ可能です")
