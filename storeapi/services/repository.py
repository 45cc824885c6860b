import logging
from sqlalchemy.exc import SQLAlchemyError

from storeapi.errors import NotFound, StoreError
from storeapi.extensions import db
from storeapi.services.validation import ensure_object_id

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Shared read/delete plumbing for one collection.

    The session is handed in by the caller (``db.session`` inside a request,
    a mock in store-free tests) so nothing here reaches for a global handle.
    Subclasses set ``model``, ``label`` and ``invalid_id_message``.
    """

    model = None
    label = "Document"
    invalid_id_message = "Invalid ID format"

    def __init__(self, session):
        self.session = session

    def ensure_id(self, doc_id):
        """Reject a malformed identifier before any store access."""
        return ensure_object_id(doc_id, self.invalid_id_message)

    # -- helpers ----------------------------------------------------------

    def _load(self, doc_id):
        """Fetch by id after checking its syntax; raise NotFound if absent."""
        self.ensure_id(doc_id)
        try:
            doc = self.session.get(self.model, doc_id.lower())
        except SQLAlchemyError as e:
            self._fail(f"fetching {self.label.lower()}", e)
        if doc is None:
            raise NotFound(f"{self.label} not found")
        return doc

    def _commit(self, action):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail(action, e)

    def _query(self, stmt, action):
        try:
            return self.session.execute(stmt)
        except SQLAlchemyError as e:
            self._fail(action, e)

    def _fail(self, action, exc):
        logger.exception("Store error while %s", action)
        self.session.rollback()
        raise StoreError(f"Error {action}", error=str(exc)) from exc

    def _newest_first(self):
        return (self.model.created_at.desc(), self.model.id.desc())

    # -- operations -------------------------------------------------------

    def list_all(self):
        stmt = db.select(self.model).order_by(*self._newest_first())
        return self._query(stmt, f"fetching {self.label.lower()}s").scalars().all()

    def get_by_id(self, doc_id):
        return self._load(doc_id)

    def delete(self, doc_id):
        """Delete a document and return its last state as a dict."""
        doc = self._load(doc_id)
        snapshot = doc.to_dict()
        self.session.delete(doc)
        self._commit(f"deleting {self.label.lower()}")
        logger.info("Deleted %s %s", self.label.lower(), snapshot["id"])
        return snapshot

    def count(self):
        stmt = db.select(db.func.count()).select_from(self.model)
        return self._query(stmt, f"counting {self.label.lower()}s").scalar()
