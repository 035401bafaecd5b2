# backend/binsurvey/services/storage/sql.py
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from binsurvey.errors import StorageError
from binsurvey.models.entry import BinSurveyEntryRow
from binsurvey.models.user import UserRow
from binsurvey.schemas.commons import as_utc, utc_now
from binsurvey.schemas.entry import BinSurveyEntry, EntryIn
from binsurvey.schemas.user import User, UserIn
from .base import Storage, new_entry_fields, patch_fields

logger = logging.getLogger(__name__)


def _to_entry(row: BinSurveyEntryRow) -> BinSurveyEntry:
    entry = BinSurveyEntry.model_validate(row)
    entry.datetime = as_utc(entry.datetime)
    entry.bin_types = list(entry.bin_types)
    return entry


class SqlStorage(Storage):
    """Durable backend on a SQLAlchemy session factory. One session and transaction per operation."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        # 作成時刻の単調性のため作成処理だけは直列化する
        self._create_lock = threading.Lock()

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(f"Storage operation {operation} failed")
            raise StorageError(operation, exc) from exc
        finally:
            db.close()

    def _entries_query(self, db: Session):
        return db.query(BinSurveyEntryRow).order_by(
            BinSurveyEntryRow.datetime.desc(), BinSurveyEntryRow.id.desc()
        )

    # Users
    def get_user(self, user_id: int) -> Optional[User]:
        with self._session("get_user") as db:
            row = db.get(UserRow, user_id)
            return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session("get_user_by_username") as db:
            row = db.query(UserRow).filter(UserRow.username == username).first()
            return User.model_validate(row) if row else None

    def create_user(self, data: UserIn) -> User:
        with self._session("create_user") as db:
            row = UserRow(username=data.username, password=data.password)
            db.add(row)
            db.flush()  # id 採番
            return User.model_validate(row)

    # Bin survey entries
    def get_all_entries(self) -> list[BinSurveyEntry]:
        with self._session("get_all_entries") as db:
            return [_to_entry(r) for r in self._entries_query(db).all()]

    def get_entry(self, entry_id: int) -> Optional[BinSurveyEntry]:
        with self._session("get_entry") as db:
            row = db.get(BinSurveyEntryRow, entry_id)
            return _to_entry(row) if row else None

    def create_entry(self, data: EntryIn) -> BinSurveyEntry:
        with self._create_lock, self._session("create_entry") as db:
            now = utc_now()
            last = db.query(func.max(BinSurveyEntryRow.datetime)).scalar()
            if last is not None and now < as_utc(last):
                now = as_utc(last)
            row = BinSurveyEntryRow(datetime=now, **new_entry_fields(data))
            db.add(row)
            db.flush()
            entry = _to_entry(row)
        logger.info(f"Created entry {entry.id} on {entry.street}")
        return entry

    def update_entry(self, entry_id: int, patch) -> Optional[BinSurveyEntry]:
        with self._session("update_entry") as db:
            row = db.get(BinSurveyEntryRow, entry_id)
            if row is None:
                return None
            fields = patch_fields(patch)
            for name, value in fields.items():
                setattr(row, name, value)
            db.flush()
            return _to_entry(row)

    def delete_entry(self, entry_id: int) -> bool:
        with self._session("delete_entry") as db:
            deleted = db.query(BinSurveyEntryRow).filter(BinSurveyEntryRow.id == entry_id).delete()
        if deleted:
            logger.info(f"Deleted entry {entry_id}")
        return bool(deleted)

    def delete_entries_by_street(self, street: str) -> int:
        with self._session("delete_entries_by_street") as db:
            deleted = (
                db.query(BinSurveyEntryRow)
                .filter(BinSurveyEntryRow.street == street)
                .delete(synchronize_session=False)
            )
        logger.info(f"Reset street {street!r}: {deleted} entries deleted")
        return deleted

    def get_unsynced_entries(self) -> list[BinSurveyEntry]:
        with self._session("get_unsynced_entries") as db:
            rows = self._entries_query(db).filter(BinSurveyEntryRow.synced.is_(False)).all()
            return [_to_entry(r) for r in rows]

    def mark_synced(self, entry_id: int) -> bool:
        with self._session("mark_synced") as db:
            updated = (
                db.query(BinSurveyEntryRow)
                .filter(BinSurveyEntryRow.id == entry_id)
                .update({BinSurveyEntryRow.synced: True}, synchronize_session=False)
            )
        return bool(updated)
