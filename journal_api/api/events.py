from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from journal_api.api.dependencies import get_store
from journal_api.models.schemas import CreateEventInput, Event, ItemEnvelope, ListEnvelope, ListMeta
from journal_api.storage.memory import Store, StoreError

router = APIRouter(prefix="/api/v1", tags=["events"])


@router.get("/events", response_model=ListEnvelope[Event])
def list_events(
    limit: int | None = None,
    store: Store = Depends(get_store),
) -> ListEnvelope[Event]:
    try:
        items = store.list_events(limit)
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=f"list events: {exc}") from exc
    return ListEnvelope[Event](data=items, meta=ListMeta(count=len(items)))


@router.post("/events", status_code=201, response_model=ItemEnvelope[Event])
def create_event(
    payload: CreateEventInput,
    store: Store = Depends(get_store),
) -> ItemEnvelope[Event]:
    try:
        event = store.create_event(payload)
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=f"create event: {exc}") from exc
    return ItemEnvelope[Event](data=event)
