"""
Unit tests for the pending import session store.
"""

from datetime import datetime, timedelta
from unittest.mock import patch

from models.reconciliation import ImportSession, ImportSource
from services.import_session_store import (
    delete_session,
    retrieve_session,
    store_session,
)


class TestImportSessionStore:

    def test_store_and_retrieve(self):
        session = ImportSession(source=ImportSource.AI)

        session_id = store_session(session)

        assert session_id == session.id
        assert retrieve_session(session_id) == session

    def test_missing_session(self):
        assert retrieve_session("nope") is None

    def test_no_expiry_by_default(self):
        session = ImportSession(source=ImportSource.AI)
        store_session(session)

        later = datetime.now() + timedelta(days=30)
        with patch("services.import_session_store.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            assert retrieve_session(session.id) == session

    def test_ttl_expires(self):
        session = ImportSession(source=ImportSource.AI)
        store_session(session, ttl_minutes=5)

        later = datetime.now() + timedelta(minutes=6)
        with patch("services.import_session_store.datetime") as mock_datetime:
            mock_datetime.now.return_value = later
            assert retrieve_session(session.id) is None

    def test_delete(self):
        session = ImportSession(source=ImportSource.AI)
        store_session(session)

        delete_session(session.id)
        delete_session(session.id)

        assert retrieve_session(session.id) is None
