# backend/binsurvey/config.py
from pathlib import Path
import os

# /app/data（コンテナ）があればそちらを優先、無ければ repo 直下の data
_container_data = Path("/app/data")
if _container_data.exists():
    DATA_DIR = _container_data
else:
    # backend/binsurvey/config.py → ../../.. = <repo root>
    DATA_DIR = Path(__file__).resolve().parents[2] / "data"

DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'app.db'}"

# sql | memory
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").lower()

UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(DATA_DIR / "uploads")))
MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(10 * 1024 * 1024)))

MUNICIPALITY = os.getenv("MUNICIPALITY", "Glyfada")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
