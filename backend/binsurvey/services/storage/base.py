# backend/binsurvey/services/storage/base.py
from abc import ABC, abstractmethod
from typing import Any, Optional

from binsurvey.schemas.entry import BinSurveyEntry, EntryIn, EntryUpdate
from binsurvey.schemas.user import User, UserIn

# update で受け付けないフィールド（採番・作成時刻は不変）
IMMUTABLE_FIELDS = ("id", "datetime")


class Storage(ABC):
    """
    Persistence contract for survey entries (and the minimal user record).

    Every backend returns ``BinSurveyEntry`` records ordered by ``datetime``
    descending (ties: newest id first). Missing records are reported as
    ``None`` / ``False`` / ``0``; a failing backing store raises
    ``StorageError``.
    """

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, data: UserIn) -> User: ...

    # Bin survey entries
    @abstractmethod
    def get_all_entries(self) -> list[BinSurveyEntry]: ...

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[BinSurveyEntry]: ...

    @abstractmethod
    def create_entry(self, data: EntryIn) -> BinSurveyEntry: ...

    @abstractmethod
    def update_entry(self, entry_id: int, patch: EntryUpdate | dict[str, Any]) -> Optional[BinSurveyEntry]: ...

    @abstractmethod
    def delete_entry(self, entry_id: int) -> bool: ...

    @abstractmethod
    def delete_entries_by_street(self, street: str) -> int: ...

    @abstractmethod
    def get_unsynced_entries(self) -> list[BinSurveyEntry]: ...

    @abstractmethod
    def mark_synced(self, entry_id: int) -> bool: ...


def new_entry_fields(data: EntryIn) -> dict[str, Any]:
    """Column values for a new entry, before id and datetime are assigned."""
    return {
        "municipality": data.municipality,
        "street": data.street,
        "latitude": data.latitude,
        "longitude": data.longitude,
        "bin_types": list(data.bin_types),
        "quantity": data.quantity,
        # 空文字は「写真なし」「コメントなし」と同じ扱い
        "photo_uri": data.photo_uri or None,
        "comments": data.comments or None,
        "synced": False,
    }


def patch_fields(patch: EntryUpdate | dict[str, Any]) -> dict[str, Any]:
    """Normalize a partial update to snake_case fields the store may change."""
    if isinstance(patch, EntryUpdate):
        fields = patch.model_dump(exclude_unset=True)
    else:
        # synced は true 以外では変更しない（検証前に落とす）
        patch = {k: v for k, v in patch.items() if k != "synced" or v is True}
        fields = EntryUpdate.model_validate(patch).model_dump(exclude_unset=True)
    for name in IMMUTABLE_FIELDS:
        fields.pop(name, None)
    if not fields.get("synced"):
        fields.pop("synced", None)
    for name in ("street", "latitude", "longitude", "bin_types", "quantity", "municipality"):
        if name in fields and fields[name] is None:
            fields.pop(name)
    for name in ("photo_uri", "comments"):
        if name in fields:
            fields[name] = fields[name] or None
    return fields
