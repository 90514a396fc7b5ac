from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from concertinfo.auth import require_api_key
from concertinfo.database import get_session
from concertinfo.models import Concert
from concertinfo.schemas import ConcertCreate, ConcertOut, ConcertUpdate

router = APIRouter(prefix="/api/concerts", tags=["concerts"])


@router.get("", response_model=list[ConcertOut])
async def list_concerts(session: AsyncSession = Depends(get_session)):
    result = await session.execute(select(Concert).order_by(Concert.date, Concert.time))
    return result.scalars().all()


@router.post("", response_model=ConcertOut, status_code=201, dependencies=[Depends(require_api_key)])
async def create_concert(data: ConcertCreate, session: AsyncSession = Depends(get_session)):
    concert = Concert(**data.model_dump())
    session.add(concert)
    await session.commit()
    await session.refresh(concert)
    return concert


@router.put("/{concert_id}", response_model=ConcertOut, dependencies=[Depends(require_api_key)])
async def update_concert(
    concert_id: int, data: ConcertUpdate, session: AsyncSession = Depends(get_session)
):
    concert = await session.get(Concert, concert_id)
    if not concert:
        raise HTTPException(404, "Concert not found")
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "comments":
            continue
        setattr(concert, field, value)
    await session.commit()
    await session.refresh(concert)
    return concert


@router.delete("/{concert_id}", status_code=204, dependencies=[Depends(require_api_key)])
async def delete_concert(concert_id: int, session: AsyncSession = Depends(get_session)):
    concert = await session.get(Concert, concert_id)
    if not concert:
        raise HTTPException(404, "Concert not found")
    await session.delete(concert)
    await session.commit()
