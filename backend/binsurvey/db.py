from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from binsurvey.config import DATABASE_URL
# モデル定義側の Base（binsurvey.models.base）を利用してメタデータを統一
from binsurvey.models.base import Base


def make_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    is_sqlite = url.startswith("sqlite")
    if is_sqlite and ":memory:" not in url and url != "sqlite://":
        # sqlite:///<path> のディレクトリ作成（存在しない場合）
        Path(url.split("sqlite:///", 1)[-1]).parent.mkdir(parents=True, exist_ok=True)
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    return create_engine(url, connect_args=connect_args, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # 各モデルモジュールを明示 import してメタデータ登録を確実化
    import binsurvey.models.entry  # noqa: F401
    import binsurvey.models.user  # noqa: F401
    Base.metadata.create_all(bind=engine)
