from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from concertinfo.auth import require_api_key
from concertinfo.errors import RenderError, UnknownTargetError
from concertinfo.schemas import ConcertRecord, ImportRequest, ImportResult, TargetOut
from concertinfo.services.pipeline import run_import, scrape_concerts
from concertinfo.services.store import ConcertStore, get_store
from concertinfo.targets.registry import get_target, list_target_keys

router = APIRouter(prefix="/api/imports", tags=["imports"])


@router.get("/targets", response_model=list[TargetOut])
async def list_targets():
    targets = []
    for key in list_target_keys():
        target = get_target(key)
        targets.append(TargetOut(
            key=key,
            default_value=target.default_value,
            example_url=target.build_url(target.default_value),
        ))
    return targets


@router.post("/preview", response_model=list[ConcertRecord])
async def preview_import(data: ImportRequest):
    """Scrape a listing and return the records without storing them."""
    try:
        return await scrape_concerts(data.target, data.value, limit=data.limit)
    except UnknownTargetError as e:
        raise HTTPException(404, str(e))
    except RenderError as e:
        raise HTTPException(504, str(e))


@router.post("", response_model=ImportResult, dependencies=[Depends(require_api_key)])
async def import_listing(data: ImportRequest, store: ConcertStore = Depends(get_store)):
    """Scrape a listing and insert every record; failures land in the summary."""
    try:
        return await run_import(data.target, data.value, store=store, limit=data.limit)
    except UnknownTargetError as e:
        raise HTTPException(404, str(e))
    except RenderError as e:
        raise HTTPException(504, str(e))
