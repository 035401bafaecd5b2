# backend/binsurvey/api/deps.py
from pathlib import Path

from fastapi import Request

from binsurvey.config import UPLOAD_DIR
from binsurvey.services.storage import Storage


def get_storage(request: Request) -> Storage:
    # 起動時に一度だけ選択したバックエンド（main.on_startup）
    return request.app.state.storage


def get_upload_dir() -> Path:
    return UPLOAD_DIR
