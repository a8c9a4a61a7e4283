# =============================================================================
# Request Deadline Gate
# =============================================================================

from datetime import datetime, date, time
from typing import Optional, Union

from core.utils import add_months, app_now, validate_month
from models.constants import DEADLINE_DAY
from models.data_models import Role

def deadline(year: int, month: int) -> date:
    """
    Submission deadline for requests in the given month.

    The 26th of the preceding month: viewing May 2025 gives 2025-04-26,
    viewing January 2026 gives 2025-12-26.
    """
    validate_month(year, month)
    prev_year, prev_month = add_months(year, month, -1)
    return date(prev_year, prev_month, DEADLINE_DAY)

def deadline_for(target: date) -> date:
    """Deadline for the month containing ``target``."""
    return deadline(target.year, target.month)

def deadline_cutoff(year: int, month: int) -> datetime:
    # Requests lock from the start of the deadline day
    return datetime.combine(deadline(year, month), time.min)

def is_deadline_passed(year: int, month: int, now: Optional[datetime] = None) -> bool:
    now = now or app_now()
    return now > deadline_cutoff(year, month)

def can_submit(role: Union[Role, str], now: Optional[datetime], year: int, month: int) -> bool:
    """Administrators always may write; staff only until the deadline."""
    if Role(role) == Role.ADMIN:
        return True
    return not is_deadline_passed(year, month, now)
