# =============================================================================
# Staff Registry
# =============================================================================

import logging
import uuid
from typing import Callable, List, Optional

from core.backends import Collection
from core.exceptions import AuthorizationError, ValidationError
from models.constants import DEFAULT_STAFF, STAFF_COLOR_PALETTE, UNKNOWN_STAFF_COLOR
from models.data_models import Actor, StaffMember

logger = logging.getLogger(__name__)

class StaffRegistry:
    """Reception staff roster. Changes are administrator-only."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def members(self) -> List[StaffMember]:
        """All staff, ordered by name."""
        return [StaffMember.from_record(d["id"], d) for d in self.collection.all()]

    def get(self, staff_id: str) -> Optional[StaffMember]:
        doc = self.collection.get(staff_id)
        return StaffMember.from_record(doc["id"], doc) if doc else None

    def name_of(self, staff_id: str) -> str:
        member = self.get(staff_id)
        return member.name if member else ""

    def color_of(self, staff_id: str) -> str:
        member = self.get(staff_id)
        return member.color if member else UNKNOWN_STAFF_COLOR

    def seed_defaults(self) -> bool:
        """Populate the default roster when the collection is empty."""
        if self.collection.all():
            return False
        for entry in DEFAULT_STAFF:
            member = StaffMember(**entry)
            self.collection.create(member.id, member.to_record())
        logger.info(f"Seeded {len(DEFAULT_STAFF)} default staff members")
        return True

    def add(self, name: Optional[str], actor: Actor, color: Optional[str] = None) -> StaffMember:
        self._check_admin(actor)
        if not name or not name.strip():
            raise ValidationError("スタッフ名を入力してください")
        member = StaffMember(
            id=uuid.uuid4().hex,
            name=name,
            color=color or self._next_color(),
        )
        self.collection.create(member.id, member.to_record())
        logger.info(f"Staff added: {member.id} {member.name}")
        return member

    def rename(self, staff_id: str, name: Optional[str], actor: Actor) -> StaffMember:
        self._check_admin(actor)
        if not name or not name.strip():
            raise ValidationError("スタッフ名を入力してください")
        member = self.get(staff_id)
        if member is None:
            raise ValidationError(f"スタッフが見つかりません: {staff_id}")
        member = member.model_copy(update={"name": name.strip()})
        self.collection.update(member.id, {"name": member.name})
        logger.info(f"Staff renamed: {member.id} {member.name}")
        return member

    def remove(self, staff_id: str, actor: Actor) -> None:
        """Remove a staff member. Their existing shift requests are kept."""
        self._check_admin(actor)
        self.collection.delete(staff_id)
        logger.info(f"Staff removed: {staff_id}")

    def subscribe(self, on_change: Callable[[List[StaffMember]], None]) -> Callable[[], None]:
        return self.collection.subscribe(
            lambda docs: on_change([StaffMember.from_record(d["id"], d) for d in docs])
        )

    def _next_color(self) -> str:
        used = {m.color for m in self.members()}
        for color in STAFF_COLOR_PALETTE:
            if color not in used:
                return color
        return STAFF_COLOR_PALETTE[len(used) % len(STAFF_COLOR_PALETTE)]

    @staticmethod
    def _check_admin(actor: Actor) -> None:
        if not actor.is_admin:
            raise AuthorizationError("スタッフの管理は管理者のみ可能です")
