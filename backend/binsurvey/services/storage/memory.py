# backend/binsurvey/services/storage/memory.py
import itertools
import logging
import threading
from typing import Optional

from binsurvey.errors import StorageError
from binsurvey.schemas.commons import utc_now
from binsurvey.schemas.entry import BinSurveyEntry, EntryIn
from binsurvey.schemas.user import User, UserIn
from .base import Storage, new_entry_fields, patch_fields

logger = logging.getLogger(__name__)


def _newest_first(entries):
    return sorted(entries, key=lambda e: (e.datetime, e.id), reverse=True)


class MemStorage(Storage):
    """Ephemeral backend: insertion-ordered dicts, ids from a per-instance counter."""

    def __init__(self):
        self._lock = threading.RLock()
        self._users: dict[int, User] = {}
        self._entries: dict[int, BinSurveyEntry] = {}
        self._user_ids = itertools.count(1)
        self._entry_ids = itertools.count(1)
        self._last_datetime = None

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user.model_copy()
            return None

    def create_user(self, data: UserIn) -> User:
        with self._lock:
            if any(u.username == data.username for u in self._users.values()):
                # users.username の UNIQUE 制約と同じ扱い
                raise StorageError("create_user")
            user = User(id=next(self._user_ids), username=data.username, password=data.password)
            self._users[user.id] = user
            return user.model_copy()

    # Bin survey entries
    def get_all_entries(self) -> list[BinSurveyEntry]:
        with self._lock:
            return [e.model_copy(deep=True) for e in _newest_first(self._entries.values())]

    def get_entry(self, entry_id: int) -> Optional[BinSurveyEntry]:
        with self._lock:
            entry = self._entries.get(entry_id)
            return entry.model_copy(deep=True) if entry else None

    def create_entry(self, data: EntryIn) -> BinSurveyEntry:
        with self._lock:
            now = utc_now()
            if self._last_datetime is not None and now < self._last_datetime:
                now = self._last_datetime
            self._last_datetime = now
            entry = BinSurveyEntry(id=next(self._entry_ids), datetime=now, **new_entry_fields(data))
            self._entries[entry.id] = entry
            logger.info(f"Created entry {entry.id} on {entry.street}")
            return entry.model_copy(deep=True)

    def update_entry(self, entry_id: int, patch) -> Optional[BinSurveyEntry]:
        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return None
            fields = patch_fields(patch)
            updated = entry.model_copy(update=fields, deep=True)
            self._entries[entry_id] = updated
            return updated.model_copy(deep=True)

    def delete_entry(self, entry_id: int) -> bool:
        with self._lock:
            existed = self._entries.pop(entry_id, None) is not None
        if existed:
            logger.info(f"Deleted entry {entry_id}")
        return existed

    def delete_entries_by_street(self, street: str) -> int:
        with self._lock:
            doomed = [eid for eid, e in self._entries.items() if e.street == street]
            for eid in doomed:
                del self._entries[eid]
        logger.info(f"Reset street {street!r}: {len(doomed)} entries deleted")
        return len(doomed)

    def get_unsynced_entries(self) -> list[BinSurveyEntry]:
        with self._lock:
            pending = [e for e in self._entries.values() if not e.synced]
            return [e.model_copy(deep=True) for e in _newest_first(pending)]

    def mark_synced(self, entry_id: int) -> bool:
        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return False
            self._entries[entry_id] = entry.model_copy(update={"synced": True})
            return True
