from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from binsurvey.db import init_db, make_engine, make_session_factory
from binsurvey.schemas.entry import BinSurveyEntry, EntryIn
from binsurvey.services.storage import MemStorage, SqlStorage


def make_sql_storage() -> SqlStorage:
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    return SqlStorage(make_session_factory(engine))


@pytest.fixture
def sql_storage():
    return make_sql_storage()


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    if request.param == "memory":
        return MemStorage()
    return make_sql_storage()


@pytest.fixture
def entry_in():
    def _make(street="Achilleos", bin_types=("Green",), quantity=1, **extra):
        return EntryIn(
            street=street,
            latitude=37.8667,
            longitude=23.7667,
            bin_types=list(bin_types),
            quantity=quantity,
            **extra,
        )
    return _make


@pytest.fixture
def make_entry():
    base = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def _make(entry_id, street="Achilleos", bin_types=("Green",), quantity=1, minutes=0, **extra):
        fields = dict(
            id=entry_id,
            datetime=base + timedelta(minutes=minutes),
            municipality="Glyfada",
            street=street,
            latitude=37.8667,
            longitude=23.7667,
            bin_types=list(bin_types),
            quantity=quantity,
        )
        fields.update(extra)
        return BinSurveyEntry(**fields)
    return _make


@pytest.fixture
def client(storage, tmp_path):
    from binsurvey.api.deps import get_storage, get_upload_dir
    from binsurvey.main import app

    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_upload_dir] = lambda: tmp_path
    yield TestClient(app)
    app.dependency_overrides.clear()
