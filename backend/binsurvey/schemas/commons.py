# backend/binsurvey/schemas/commons.py
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Literal

BinType = Literal["Green", "Blue", "Brown", "Yellow"]


class CamelModel(BaseModel):
    # API は camelCase（binTypes, photoUri）、Python 側は snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite はタイムゾーンを保持しないので naive は UTC とみなす
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def iso_instant(value: datetime) -> str:
    """ISO-8601 UTC instant with millisecond precision, e.g. 2024-05-01T09:30:00.123Z."""
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
