from __future__ import annotations

from fastapi import Request

from journal_api.storage.memory import Store


def get_store(request: Request) -> Store:
    return request.app.state.store
