"""Where imported concerts are written.

The pipeline only needs ``insert``; each backend turns its own failures
into StoreError so the importer can record them and move on.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from concertinfo.config import settings
from concertinfo.errors import StoreError
from concertinfo.models import Concert
from concertinfo.schemas import ConcertOut, ConcertRecord

logger = logging.getLogger(__name__)


class ConcertStore(ABC):
    @abstractmethod
    async def insert(self, record: ConcertRecord) -> ConcertOut:
        """Persist one record and return it with its store-assigned id.

        Raises StoreError if the store rejects the record.
        """
        ...


class DatabaseConcertStore(ConcertStore):
    """SQLAlchemy-backed store; one session and commit per insert."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        if session_factory is None:
            from concertinfo.database import async_session
            session_factory = async_session
        self._session_factory = session_factory

    async def insert(self, record: ConcertRecord) -> ConcertOut:
        async with self._session_factory() as session:
            concert = Concert(**record.model_dump())
            session.add(concert)
            try:
                await session.commit()
                await session.refresh(concert)
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(str(e.orig) if getattr(e, "orig", None) else str(e)) from e
            return ConcertOut.model_validate(concert)


class RestConcertStore(ConcertStore):
    """PostgREST-style HTTP store (the hosted backend of the web app).

    Inserts with ``Prefer: return=representation`` so the response carries
    the generated id.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "concerts",
        client: httpx.AsyncClient | None = None,
    ):
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        self._client = client

    async def insert(self, record: ConcertRecord) -> ConcertOut:
        payload = [record.model_dump(mode="json")]
        try:
            if self._client is not None:
                resp = await self._client.post(self.endpoint, json=payload, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    resp = await client.post(self.endpoint, json=payload, headers=self.headers)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StoreError(_error_message(e.response)) from e
        except httpx.HTTPError as e:
            raise StoreError(f"{type(e).__name__}: {e}") from e

        try:
            rows = resp.json()
            if not rows:
                raise StoreError("Insert returned no rows")
            return ConcertOut.model_validate(rows[0])
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Unexpected insert response: {e}") from e


def _error_message(resp: httpx.Response) -> str:
    """PostgREST puts a human-readable reason in the JSON body's "message"."""
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}: {resp.text[:200]}"
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return f"HTTP {resp.status_code}"


def get_store() -> ConcertStore:
    """Return the store selected by STORE_BACKEND."""
    if settings.store_backend == "rest":
        if not settings.rest_store_url or not settings.rest_store_key:
            raise ValueError("REST store needs REST_STORE_URL and REST_STORE_KEY")
        return RestConcertStore(
            settings.rest_store_url, settings.rest_store_key, settings.rest_store_table
        )
    return DatabaseConcertStore()
