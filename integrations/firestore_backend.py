# =============================================================================
# Firestore Integration for Shift Request Calendar
# =============================================================================

import logging
import threading
from typing import Any, Callable, List, Optional

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore
from google.oauth2 import service_account

from core.backends import Collection, Document, Listener
from core.exceptions import PersistenceError
from models.data_models import AppSettings

logger = logging.getLogger(__name__)


def get_firestore_client(settings: AppSettings) -> firestore.Client:
    """Client from the service account in secrets, else application default credentials."""
    info = dict(settings.firestore_credentials or {})
    try:
        if info.get("private_key"):
            credentials = service_account.Credentials.from_service_account_info(info)
            project = settings.firestore_project or credentials.project_id
            return firestore.Client(project=project, credentials=credentials)
        return firestore.Client(project=settings.firestore_project)
    except (GoogleAPICallError, ValueError) as e:
        logger.error(f"Failed to create Firestore client: {e}")
        raise PersistenceError(f"Firestore に接続できません: {e}")


class FirestoreCollection(Collection):
    """
    One Firestore collection behind the backend interface.

    While at least one subscriber is registered a snapshot listener keeps a
    local copy of the ordered collection, and ``all()`` reads from it.
    Snapshot callbacks arrive on Firestore's background thread.
    """

    def __init__(self, client: firestore.Client, name: str, order_by: Optional[str] = None):
        super().__init__(name, order_by)
        self._ref = client.collection(name)
        self._cache: Optional[List[Document]] = None
        self._listeners: List[Listener] = []
        self._watch = None
        self._lock = threading.RLock()

    def all(self) -> List[Document]:
        with self._lock:
            if self._cache is not None:
                return list(self._cache)
        snapshots = self._call("list", lambda: list(self._ref.order_by(self.order_by).stream()))
        return [self._to_doc(s) for s in snapshots]

    def get(self, doc_id: str) -> Optional[Document]:
        snapshot = self._call("get", lambda: self._ref.document(doc_id).get())
        return self._to_doc(snapshot) if snapshot.exists else None

    def create(self, doc_id: str, data: Document) -> None:
        self._call("create", lambda: self._ref.document(doc_id).set(data))

    def update(self, doc_id: str, data: Document) -> None:
        self._call("update", lambda: self._ref.document(doc_id).update(data))

    def delete(self, doc_id: str) -> None:
        self._call("delete", lambda: self._ref.document(doc_id).delete())

    def subscribe(self, on_change: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(on_change)
            cached = list(self._cache) if self._cache is not None else None
            if self._watch is None:
                # snapshot callbacks wait on this lock until the watch is recorded
                query = self._ref.order_by(self.order_by)
                try:
                    self._watch = self._call("subscribe", lambda: query.on_snapshot(self._on_snapshot))
                except PersistenceError:
                    self._listeners.remove(on_change)
                    raise
                cached = None
        if cached is not None:
            on_change(cached)

        def unsubscribe() -> None:
            with self._lock:
                if on_change in self._listeners:
                    self._listeners.remove(on_change)
                watch = self._watch if not self._listeners else None
                if watch is not None:
                    self._watch = None
                    self._cache = None
            if watch is not None:
                watch.unsubscribe()

        return unsubscribe

    def _on_snapshot(self, snapshots, changes, read_time) -> None:
        docs = [self._to_doc(s) for s in snapshots]
        with self._lock:
            self._cache = docs
            listeners = list(self._listeners)
        logger.debug(f"{self.name}: snapshot with {len(docs)} documents at {read_time}")
        for listener in listeners:
            listener(docs)

    def _call(self, action: str, fn: Callable[[], Any]) -> Any:
        try:
            return fn()
        except GoogleAPICallError as e:
            logger.error(f"Firestore {action} on {self.name} failed: {e}")
            raise PersistenceError(f"{self.name} の{action}に失敗しました: {e}")

    @staticmethod
    def _to_doc(snapshot) -> Document:
        return {**(snapshot.to_dict() or {}), "id": snapshot.id}
