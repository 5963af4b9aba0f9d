from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from journal_api.api.dependencies import get_store
from journal_api.models.schemas import ListEnvelope, ListMeta, Metric
from journal_api.storage.memory import Store, StoreError

router = APIRouter(prefix="/api/v1", tags=["metrics"])


@router.get("/metrics/daily", response_model=ListEnvelope[Metric])
def list_daily_metrics(
    days: int | None = None,
    store: Store = Depends(get_store),
) -> ListEnvelope[Metric]:
    # "days" counts the most recently stored entries; it is not a calendar range.
    try:
        items = store.list_metrics(days)
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=f"list metrics: {exc}") from exc
    return ListEnvelope[Metric](data=items, meta=ListMeta(count=len(items)))
