"""
Persistence backends for the shift request calendar.

Each collection (staff, shifts, custom holidays, deleted shifts) is reached
through the same small interface: list, get, create, update, delete and
subscribe. The in-memory and JSON-file versions live here; the Firestore
version is in ``integrations/firestore_backend.py``.
"""
import copy
import json
import logging
import os
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from core.exceptions import PersistenceError
from models.constants import COLLECTION_ORDER, DATA_DIR

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Listener = Callable[[List[Document]], None]


class Collection:
    """Interface every backend collection implements.

    Documents are plain dicts; ``all()`` returns them with their id under the
    ``"id"`` key, ordered by the collection's order field.
    """

    def __init__(self, name: str, order_by: Optional[str] = None):
        self.name = name
        self.order_by = order_by or COLLECTION_ORDER.get(name, "id")

    def all(self) -> List[Document]:
        raise NotImplementedError

    def get(self, doc_id: str) -> Optional[Document]:
        return next((d for d in self.all() if d["id"] == doc_id), None)

    def create(self, doc_id: str, data: Document) -> None:
        raise NotImplementedError

    def update(self, doc_id: str, data: Document) -> None:
        raise NotImplementedError

    def delete(self, doc_id: str) -> None:
        raise NotImplementedError

    def subscribe(self, on_change: Listener) -> Callable[[], None]:
        """Register ``on_change`` for every change; returns the unsubscribe handle."""
        raise NotImplementedError

    def _sort(self, docs: List[Document]) -> List[Document]:
        return sorted(docs, key=lambda d: (str(d.get(self.order_by, "")), d["id"]))


class MemoryCollection(Collection):
    """Process-local collection. Listeners are called synchronously."""

    def __init__(self, name: str, order_by: Optional[str] = None,
                 initial: Optional[Dict[str, Document]] = None):
        super().__init__(name, order_by)
        self._docs: Dict[str, Document] = copy.deepcopy(initial or {})
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    def all(self) -> List[Document]:
        with self._lock:
            docs = [{**copy.deepcopy(data), "id": doc_id} for doc_id, data in self._docs.items()]
        return self._sort(docs)

    def get(self, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._docs.get(doc_id)
        return {**copy.deepcopy(data), "id": doc_id} if data is not None else None

    def create(self, doc_id: str, data: Document) -> None:
        with self._lock:
            docs = dict(self._docs)
            docs[doc_id] = copy.deepcopy({k: v for k, v in data.items() if k != "id"})
            self._commit(docs)
        self._notify()

    def update(self, doc_id: str, data: Document) -> None:
        with self._lock:
            if doc_id not in self._docs:
                raise PersistenceError(f"{self.name}/{doc_id} が見つかりません")
            docs = dict(self._docs)
            docs[doc_id] = {**docs[doc_id], **copy.deepcopy({k: v for k, v in data.items() if k != "id"})}
            self._commit(docs)
        self._notify()

    def delete(self, doc_id: str) -> None:
        with self._lock:
            if doc_id not in self._docs:
                return
            docs = dict(self._docs)
            del docs[doc_id]
            self._commit(docs)
        self._notify()

    def subscribe(self, on_change: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(on_change)
        on_change(self.all())

        def unsubscribe() -> None:
            with self._lock:
                if on_change in self._listeners:
                    self._listeners.remove(on_change)

        return unsubscribe

    def _commit(self, docs: Dict[str, Document]) -> None:
        self._docs = docs

    def _notify(self) -> None:
        snapshot = self.all()
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snapshot)


class JsonFileCollection(MemoryCollection):
    """Collection persisted to ``<data_dir>/<name>.json`` after every write."""

    def __init__(self, name: str, data_dir: str = DATA_DIR, order_by: Optional[str] = None):
        self.name = name
        self.path = os.path.join(data_dir, f"{name}.json")
        super().__init__(name, order_by, initial=self._load())

    def _load(self) -> Dict[str, Document]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load {self.path}: {e}")
            raise PersistenceError(f"{self.name} の読み込みに失敗しました: {e}")
        return data.get("documents", {})

    def _commit(self, docs: Dict[str, Document]) -> None:
        payload = {
            "documents": docs,
            "last_updated": datetime.now().isoformat(),
        }
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False, default=str)
        except OSError as e:
            logger.error(f"Failed to save {self.path}: {e}")
            raise PersistenceError(f"{self.name} の保存に失敗しました: {e}")
        super()._commit(docs)
