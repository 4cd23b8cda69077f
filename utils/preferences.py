"""
Preferences Module - Durable per-visitor key-value storage

Stores the visitor's ``theme`` and ``language`` choices. A missing or
unreadable value is reported as absent (None) and never raises.
"""

import logging
import threading
import uuid
from flask import session
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

VISITOR_SESSION_KEY = 'visitor_id'


def get_visitor_id():
    """Return the visitor id from the session, creating one on first visit"""
    visitor_id = session.get(VISITOR_SESSION_KEY)
    if not visitor_id:
        visitor_id = str(uuid.uuid4())
        session[VISITOR_SESSION_KEY] = visitor_id
        session.permanent = True
    return visitor_id


class MemoryPreferenceStore:
    """Dict-backed store; lives as long as the process"""

    def __init__(self, initial=None):
        self._values = dict(initial or {})
        self._lock = threading.Lock()
        self.writes = 0

    def get(self, key):
        with self._lock:
            return self._values.get(key)

    def set(self, key, value):
        with self._lock:
            self._values[key] = value
            self.writes += 1


class DatabasePreferenceStore:
    """
    SQLAlchemy-backed store scoped to one visitor.

    Each call pushes its own application context so that writes issued from
    transition timer threads reach the database.
    """

    def __init__(self, app, visitor_id):
        self.app = app
        self.visitor_id = visitor_id

    def get(self, key):
        from models import VisitorPreference

        with self.app.app_context():
            try:
                row = VisitorPreference.query.filter_by(
                    visitor_id=self.visitor_id, key=key).first()
                return row.value if row else None
            except SQLAlchemyError as e:
                logger.error(f"Error reading preference {key} for {self.visitor_id}: {str(e)}")
                return None

    def set(self, key, value):
        from extensions import db
        from models import VisitorPreference

        with self.app.app_context():
            try:
                row = VisitorPreference.query.filter_by(
                    visitor_id=self.visitor_id, key=key).first()
                if row:
                    row.value = value
                else:
                    db.session.add(VisitorPreference(
                        visitor_id=self.visitor_id, key=key, value=value))
                db.session.commit()
                logger.debug(f"Saved preference {key}={value} for {self.visitor_id}")
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"Error saving preference {key} for {self.visitor_id}: {str(e)}")


def create_preference_store(app, visitor_id):
    """Build the store selected by the PREFERENCE_BACKEND setting"""
    backend = app.config.get('PREFERENCE_BACKEND', 'database')
    if backend == 'memory':
        return MemoryPreferenceStore()
    if backend == 'database':
        return DatabasePreferenceStore(app, visitor_id)
    raise ValueError(f"Unknown preference backend: {backend}")
