from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from concertinfo.errors import StoreError
from concertinfo.metrics import IMPORT_RECORDS_TOTAL
from concertinfo.schemas import ConcertRecord, ImportFailure, ImportSummary
from concertinfo.services.store import ConcertStore

logger = logging.getLogger(__name__)


async def import_concerts(
    records: Iterable[ConcertRecord],
    store: ConcertStore,
    *,
    cancel: asyncio.Event | None = None,
) -> ImportSummary:
    """Insert records one at a time, in order, tallying successes and failures.

    A StoreError on one record is recorded against its artist and the batch
    carries on. If ``cancel`` is set the remaining records are not attempted
    and the summary is flagged as cancelled.
    """
    summary = ImportSummary()
    for record in records:
        if cancel is not None and cancel.is_set():
            logger.info("Import cancelled after %d records", summary.succeeded + summary.failed)
            summary.cancelled = True
            break
        try:
            await store.insert(record)
        except StoreError as e:
            summary.failed += 1
            summary.failures.append(ImportFailure(record_label=record.artist, reason=str(e)))
            IMPORT_RECORDS_TOTAL.labels(status="failed").inc()
            logger.warning("Import failed for '%s': %s", record.artist, e)
        else:
            summary.succeeded += 1
            IMPORT_RECORDS_TOTAL.labels(status="succeeded").inc()

    logger.info("Import finished: %d succeeded, %d failed", summary.succeeded, summary.failed)
    return summary
