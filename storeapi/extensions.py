from datetime import timezone

from bson import ObjectId
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()


def new_object_id():
    """Return a fresh 24-char hex document identifier."""
    return str(ObjectId())


def utc_isoformat(value):
    """ISO 8601 text for a stored timestamp, always in UTC.

    SQLite hands back naive datetimes for what was written as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
