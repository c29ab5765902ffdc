"""
Async adapter over the model store HTTP client.

Blocking urllib calls run in a worker thread so the event loop keeps running
while a request is in flight. Transport and decoding failures are translated
into the store error taxonomy (FetchFailed, SubmitFailed, DeleteFailed).
"""

import asyncio
import logging
from typing import Union
from urllib.error import HTTPError, URLError

from pydantic import ValidationError

from ..api.schemas import ModelCollection, ModelDraft, ModelRecord
from .errors import DeleteFailed, FetchFailed, SubmitFailed
from .http_client import ModelStoreHttpClient

logger = logging.getLogger("modelboard.client")


def _describe(e: Exception) -> str:
    if isinstance(e, HTTPError):
        try:
            body = e.read().decode("utf-8")
        except Exception:
            body = ""
        return f"HTTP {e.code}: {body or e.reason}"
    return str(e)


class RemoteModelStore:
    """Model store reachable over HTTP, exposing awaitable CRUD operations."""

    def __init__(self, http_client: ModelStoreHttpClient):
        self.http = http_client

    async def _call(self, error_cls, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except HTTPError as e:
            logger.error("%s: %s", error_cls.message, _describe(e))
            raise error_cls(status=e.code) from e
        except URLError as e:
            logger.error("%s: failed to reach %s: %s", error_cls.message, self.http.server_base, e)
            raise error_cls() from e
        except ValueError as e:
            logger.error("%s: invalid response: %s", error_cls.message, e)
            raise error_cls() from e

    async def list_models(self) -> ModelCollection:
        rows = await self._call(FetchFailed, self.http.list_models)
        records = []
        for index, row in enumerate(rows):
            try:
                records.append(ModelRecord.model_validate(row))
            except ValidationError as e:
                # A row without an id or name is skipped, the others are kept
                logger.warning("skipping unreadable model record #%d: %s", index, e)
        return tuple(records)

    async def create_model(self, draft: ModelDraft) -> None:
        await self._call(SubmitFailed, self.http.create_model, draft.model_dump())

    async def update_model(self, model_id: Union[int, str], draft: ModelDraft) -> None:
        await self._call(SubmitFailed, self.http.update_model, model_id, draft.model_dump())

    async def delete_model(self, model_id: Union[int, str]) -> None:
        await self._call(DeleteFailed, self.http.delete_model, model_id)


def create_store(config) -> RemoteModelStore:
    """Model store client for a DashboardConfig."""
    http_client = ModelStoreHttpClient(
        config.api_url,
        timeout=config.timeout,
        verify_tls=config.verify_tls,
        session_cookie=config.session_cookie,
    )
    return RemoteModelStore(http_client)
