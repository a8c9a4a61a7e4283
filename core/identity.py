# =============================================================================
# Anonymous Session Identity
# =============================================================================

import uuid
from typing import Union

from models.data_models import Actor, Role

ANON_PREFIX = "anon-"

def new_session_uid() -> str:
    """Identifier for an anonymous browser session, used in the audit fields."""
    return f"{ANON_PREFIX}{uuid.uuid4().hex[:20]}"

def make_actor(uid: str, role: Union[Role, str]) -> Actor:
    return Actor(uid=uid, role=Role(role))
