# =============================================================================
# Store Wiring
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from datetime import datetime

from core.backends import Collection, JsonFileCollection, MemoryCollection
from core.holidays import HolidayRegistry
from core.shift_store import ShiftStore
from core.staff import StaffRegistry
from core.utils import app_now
from models.constants import (
    BACKEND_FIRESTORE, BACKEND_JSON, COLLECTION_CUSTOM_HOLIDAYS, COLLECTION_DELETED_SHIFTS,
    COLLECTION_ORDER, COLLECTION_SHIFTS, COLLECTION_STAFF,
)
from models.data_models import AppSettings

logger = logging.getLogger(__name__)

@dataclass
class Services:
    staff: StaffRegistry
    shifts: ShiftStore
    holidays: HolidayRegistry

def build_collections(settings: AppSettings) -> Dict[str, Collection]:
    """One backend collection per record type, for the configured backend."""
    names = [COLLECTION_STAFF, COLLECTION_SHIFTS, COLLECTION_CUSTOM_HOLIDAYS, COLLECTION_DELETED_SHIFTS]

    if settings.backend == BACKEND_FIRESTORE:
        from integrations.firestore_backend import FirestoreCollection, get_firestore_client
        client = get_firestore_client(settings)
        return {name: FirestoreCollection(client, name, COLLECTION_ORDER[name]) for name in names}

    if settings.backend == BACKEND_JSON:
        return {name: JsonFileCollection(name, settings.data_dir, COLLECTION_ORDER[name]) for name in names}

    return {name: MemoryCollection(name, COLLECTION_ORDER[name]) for name in names}

def build_services(settings: AppSettings,
                   clock: Optional[Callable[[], datetime]] = None,
                   seed: bool = True) -> Services:
    collections = build_collections(settings)
    services = Services(
        staff=StaffRegistry(collections[COLLECTION_STAFF]),
        shifts=ShiftStore(
            collections[COLLECTION_SHIFTS],
            collections[COLLECTION_DELETED_SHIFTS],
            clock=clock or (lambda: app_now(settings.timezone)),
        ),
        holidays=HolidayRegistry(collections[COLLECTION_CUSTOM_HOLIDAYS]),
    )
    if seed:
        services.staff.seed_defaults()
    logger.info(f"Services ready on '{settings.backend}' backend")
    return services
