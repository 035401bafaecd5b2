# backend/binsurvey/schemas/entry.py
import datetime as dt
from typing import Literal, Optional

from pydantic import Field, model_validator

from binsurvey.config import MUNICIPALITY
from .commons import BinType, CamelModel


class EntryIn(CamelModel):
    municipality: str = MUNICIPALITY
    street: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    bin_types: list[BinType] = Field(min_length=1)
    quantity: int = Field(ge=1)
    photo_uri: Optional[str] = None
    comments: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def expand_bin_counts(cls, data):
        """Counter workflow: ``binCounts`` {"Green": 2, "Blue": 1} becomes
        binTypes ["Green", "Green", "Blue"] with quantity 3."""
        if not isinstance(data, dict):
            return data
        counts = data.get("binCounts", data.get("bin_counts"))
        if counts is None or not isinstance(counts, dict):
            return data
        data = {k: v for k, v in data.items() if k not in ("binCounts", "bin_counts")}
        bin_types: list = []
        for bin_type, count in counts.items():
            if isinstance(count, int) and count > 0:
                bin_types.extend([bin_type] * count)
        data.setdefault("binTypes", bin_types)
        data.setdefault("quantity", len(bin_types))
        return data


class EntryUpdate(CamelModel):
    municipality: Optional[str] = None
    street: Optional[str] = Field(default=None, min_length=1)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    bin_types: Optional[list[BinType]] = Field(default=None, min_length=1)
    quantity: Optional[int] = Field(default=None, ge=1)
    photo_uri: Optional[str] = None
    comments: Optional[str] = None
    # 同期フラグは false → true の一方向のみ
    synced: Optional[Literal[True]] = None


class BinSurveyEntry(CamelModel):
    id: int
    datetime: dt.datetime
    municipality: str
    street: str
    latitude: float
    longitude: float
    bin_types: list[str]
    quantity: int
    photo_uri: Optional[str] = None
    comments: Optional[str] = None
    synced: bool = False
