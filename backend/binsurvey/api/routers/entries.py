import json
import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from binsurvey.api.deps import get_storage, get_upload_dir
from binsurvey.config import MAX_PHOTO_BYTES
from binsurvey.errors import PhotoError
from binsurvey.schemas.entry import BinSurveyEntry, EntryIn, EntryUpdate
from binsurvey.services.photos.upload import save_photo
from binsurvey.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

# multipart で JSON 文字列として送られてくる項目
_JSON_FORM_FIELDS = ("binTypes", "binCounts")


async def _read_payload(request: Request) -> tuple[dict[str, Any], Optional[UploadFile]]:
    """JSON body or multipart form (binTypes as a JSON string, optional ``photo`` file)."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        data: dict[str, Any] = {}
        photo = None
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == "photo":
                    photo = value
                continue
            if key in _JSON_FORM_FIELDS:
                try:
                    value = json.loads(value)
                except ValueError:
                    raise RequestValidationError(
                        [{"loc": ("body", key), "msg": "must be a JSON array or object", "type": "json_invalid"}]
                    )
            data[key] = value
        return data, photo
    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError([{"loc": ("body",), "msg": "invalid JSON body", "type": "json_invalid"}])
    if not isinstance(body, dict):
        raise RequestValidationError([{"loc": ("body",), "msg": "expected a JSON object", "type": "dict_type"}])
    return body, None


async def _attach_photo(data: dict[str, Any], photo: Optional[UploadFile], upload_dir: Path) -> None:
    if photo is None or not photo.filename:
        return
    content = await photo.read()
    try:
        data["photoUri"] = save_photo(photo.filename, content, upload_dir, MAX_PHOTO_BYTES)
    except PhotoError as exc:
        logger.warning(f"Rejected photo upload {photo.filename!r}: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("")
@router.get("/", include_in_schema=False)
def list_entries(storage: Storage = Depends(get_storage)) -> list[BinSurveyEntry]:
    return storage.get_all_entries()


# /{entry_id} より先に定義すること
@router.get("/unsynced")
def list_unsynced(storage: Storage = Depends(get_storage)) -> list[BinSurveyEntry]:
    return storage.get_unsynced_entries()


@router.get("/{entry_id}")
def get_entry(entry_id: int, storage: Storage = Depends(get_storage)) -> BinSurveyEntry:
    entry = storage.get_entry(entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="entry not found")
    return entry


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
async def create_entry(
    request: Request,
    storage: Storage = Depends(get_storage),
    upload_dir: Path = Depends(get_upload_dir),
) -> BinSurveyEntry:
    data, photo = await _read_payload(request)
    try:
        payload = EntryIn.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors())
    # 写真は検証を通ってから保存する
    await _attach_photo(data, photo, upload_dir)
    if "photoUri" in data:
        payload.photo_uri = data["photoUri"]
    return storage.create_entry(payload)


@router.patch("/{entry_id}")
async def update_entry(
    entry_id: int,
    request: Request,
    storage: Storage = Depends(get_storage),
    upload_dir: Path = Depends(get_upload_dir),
) -> BinSurveyEntry:
    data, photo = await _read_payload(request)
    try:
        patch = EntryUpdate.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors())
    if storage.get_entry(entry_id) is None:
        raise HTTPException(status_code=404, detail="entry not found")
    await _attach_photo(data, photo, upload_dir)
    if "photoUri" in data:
        patch.photo_uri = data["photoUri"]
    entry = storage.update_entry(entry_id, patch)
    if not entry:
        raise HTTPException(status_code=404, detail="entry not found")
    return entry


@router.delete("/{entry_id}", status_code=204)
def delete_entry(entry_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_entry(entry_id):
        raise HTTPException(status_code=404, detail="entry not found")
    return Response(status_code=204)


@router.patch("/{entry_id}/sync")
def mark_synced(entry_id: int, storage: Storage = Depends(get_storage)):
    if not storage.mark_synced(entry_id):
        raise HTTPException(status_code=404, detail="entry not found")
    return {"message": "Entry marked as synced"}
