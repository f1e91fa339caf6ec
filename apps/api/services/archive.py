"""Archive of explicitly saved results with a bounded recency index."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from config import settings
from services.errors import InvalidInputError
from services.store import SAVED_RESULTS_LIST_KEY, ContentStore, saved_key

logger = logging.getLogger(__name__)

SAVED_RESULT_TYPE = "saved_analysis"


async def save_result(store: ContentStore, result: Any) -> str:
    """
    Persist ``result`` and push its id onto the recency index.

    The submitted ``id`` is reused when present. Index entries trimmed past
    ``SAVED_RESULTS_LIMIT`` leave their records in place until they expire.
    """
    if not isinstance(result, dict) or not result.get("title"):
        raise InvalidInputError("Invalid result data")

    save_id = str(result.get("id") or uuid.uuid4())
    saved = {
        **result,
        "id": save_id,
        "savedAt": datetime.now(timezone.utc).isoformat(),
        "type": SAVED_RESULT_TYPE,
    }
    await store.put_json(saved_key(save_id), settings.SAVED_RESULT_TTL_SECONDS, saved)
    await store.push_recent(SAVED_RESULTS_LIST_KEY, save_id, settings.SAVED_RESULTS_LIMIT)
    return save_id


async def list_saved_results(store: ContentStore) -> List[Dict[str, Any]]:
    """Return archived results most recent first, skipping ids whose record is gone."""
    saved_ids = await store.list_members(SAVED_RESULTS_LIST_KEY)
    if not saved_ids:
        return []

    records = await store.get_many_json([saved_key(saved_id) for saved_id in saved_ids])
    results = [record for record in records if record is not None]
    dropped = len(saved_ids) - len(results)
    if dropped:
        logger.info("Skipped %d saved results with missing or unreadable records", dropped)
    return results
