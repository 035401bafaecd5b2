import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from binsurvey.api.routers import entries, streets, export, report
from binsurvey.config import LOG_LEVEL, STORAGE_BACKEND, UPLOAD_DIR
from binsurvey.errors import StorageError, validation_details
from binsurvey.services.storage import build_storage

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Waste Bin Survey API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"ok": True}


# 起動時にストレージを一度だけ選択（DBスキーマもここで作成）
@app.on_event("startup")
def on_startup():
    app.state.storage = build_storage(STORAGE_BACKEND)


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": "Invalid data", "errors": validation_details(exc.errors())})


@app.exception_handler(StorageError)
async def on_storage_error(request: Request, exc: StorageError):
    # 詳細はログのみ（sql.py で logger.exception 済み）
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Storage failure"})


app.include_router(entries.router, prefix="/entries", tags=["entries"])
app.include_router(streets.router, prefix="/streets", tags=["streets"])
app.include_router(export.router,  prefix="/export",  tags=["export"])
app.include_router(report.router,  prefix="/report",  tags=["report"])

# /uploads を静的配信（写真）
UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(UPLOAD_DIR)), name="uploads")
