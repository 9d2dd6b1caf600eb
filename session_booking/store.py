"""
Firestore layer of the booking console.

Outbound calls (create / update / delete) and the inbound realtime feed are
kept apart: ``StoreGateway`` issues writes and opens listeners, while
``LiveCollections`` is the read-only cache the listeners refill with the
full member list of a collection on every change.

Both collections live under ``artifacts/{app_id}/public/data/``.
"""

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Tuple

from google.cloud import exceptions as gexc
from google.cloud import firestore

from .errors import StorePersistFailure
from .models import SESSIONS, STUDENTS, Session, Student


logger = logging.getLogger(__name__)

DocumentPairs = List[Tuple[str, Dict[str, Any]]]
Unsubscribe = Callable[[], None]


@lru_cache(maxsize=None)
def get_client(project: Optional[str] = None) -> firestore.Client:
    """Firestore client built with Application Default Credentials (ADC)."""
    return firestore.Client(project=project)


class StoreGateway:
    """
    Per-collection operations on the tenant namespace.

    Parameters
    ----------
    client : google.cloud.firestore.Client
        Firestore client (or anything with the same ``collection`` API).
    app_id : str
        Tenant namespace under ``artifacts/``.
    """

    def __init__(self, client, app_id: str):
        self.client = client
        self.app_id = app_id

    def collection(self, name: str):
        return self.client.collection("artifacts", self.app_id, "public", "data", name)

    def create(self, collection: str, record: Dict[str, Any]) -> str:
        """Add ``record``; returns the id the store assigned."""
        try:
            _, ref = self.collection(collection).add(record)
        except gexc.GoogleCloudError as err:          # network / perms
            logger.error("Firestore create on %s failed: %s", collection, err)
            raise StorePersistFailure("create", collection) from err
        return ref.id

    def update(self, collection: str, doc_id: str, record: Dict[str, Any]) -> None:
        """Overwrite every field in ``record`` on an existing document."""
        try:
            self.collection(collection).document(doc_id).update(record)
        except gexc.GoogleCloudError as err:
            logger.error("Firestore update of %s/%s failed: %s", collection, doc_id, err)
            raise StorePersistFailure("update", collection) from err

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            self.collection(collection).document(doc_id).delete()
        except gexc.GoogleCloudError as err:
            logger.error("Firestore delete of %s/%s failed: %s", collection, doc_id, err)
            raise StorePersistFailure("delete", collection) from err

    def listen(
        self,
        collection: str,
        on_snapshot: Callable[[DocumentPairs], None],
        on_error: Callable[[Exception], None],
    ) -> Unsubscribe:
        """
        Subscribe to full snapshots of ``collection``.

        ``on_snapshot`` receives ``(doc_id, data)`` for every member on each
        change.  Firestore runs the callback on its own thread.
        """
        def _callback(col_snapshot, changes, read_time):
            try:
                on_snapshot([(doc.id, doc.to_dict() or {}) for doc in col_snapshot])
            except Exception as err:
                on_error(err)

        try:
            watch = self.collection(collection).on_snapshot(_callback)
        except gexc.GoogleCloudError as err:
            on_error(err)
            return lambda: None
        return watch.unsubscribe


class LiveCollections:
    """
    Cached sessions and students, replaced wholesale on every snapshot.

    Only the listener callbacks assign ``sessions`` and ``students``; both
    are swapped as whole tuples so readers on the UI thread always see a
    complete list.  A listener error leaves the cache as it was and ends the
    loading phase, so the UI falls back to an empty listing.
    """

    def __init__(self):
        self.sessions: Tuple[Session, ...] = ()
        self.students: Tuple[Student, ...] = ()
        self.loading = True
        self.last_error: Optional[str] = None
        self._unsubscribes: List[Unsubscribe] = []

    @property
    def started(self) -> bool:
        return bool(self._unsubscribes)

    def start(self, gateway: StoreGateway) -> None:
        if self.started:
            return
        self._unsubscribes = [
            gateway.listen(SESSIONS, self.on_sessions, self._error_handler(SESSIONS)),
            gateway.listen(STUDENTS, self.on_students, self._error_handler(STUDENTS)),
        ]

    def stop(self) -> None:
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes = []

    def on_sessions(self, docs: DocumentPairs) -> None:
        self.sessions = tuple(Session.from_document(doc_id, data) for doc_id, data in docs)
        self.loading = False
        self.last_error = None
        logger.debug("Sessions snapshot: %d documents", len(self.sessions))

    def on_students(self, docs: DocumentPairs) -> None:
        self.students = tuple(Student.from_document(doc_id, data) for doc_id, data in docs)
        self.last_error = None
        logger.debug("Students snapshot: %d documents", len(self.students))

    def _error_handler(self, collection: str) -> Callable[[Exception], None]:
        def _on_error(err: Exception) -> None:
            logger.error("%s listener error: %s", collection.capitalize(), err)
            self.last_error = f"{collection}: {err}"
            if collection == SESSIONS:
                self.loading = False
        return _on_error
