"""
Models list controller

Owns the authoritative in-memory model collection and keeps it in sync with
the remote store. Subscribers receive a fresh read-only snapshot after every
successful fetch; mutations never edit the collection locally, they only
trigger a re-fetch.
"""

import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Union

from ..api.schemas import ModelCollection, ModelDraft
from ..client.errors import FetchFailed, ModelStoreError

logger = logging.getLogger("modelboard.dashboard")

DELETE_PROMPT = "Are you sure you want to delete this model?"

Subscriber = Callable[[ModelCollection], Any]
ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]
NotifyCallback = Callable[[str], Any]


class FetchState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


def _deny(prompt: str) -> bool:
    return False


async def _resolve(result):
    if inspect.isawaitable(result):
        return await result
    return result


class ModelListController:
    """
    CRUD list of model records backed by a remote store.

    Args:
        store: object with awaitable list_models/create_model/update_model/delete_model
        is_admin: capability flag; only read by views to decide which controls to offer
        confirm: confirmation-result callback for deletes; denies by default
        notify: dismiss-only notification sink for failed mutations
        discard_stale_fetches: drop responses issued before the last applied fetch
    """

    def __init__(
        self,
        store,
        is_admin: bool = False,
        confirm: Optional[ConfirmCallback] = None,
        notify: Optional[NotifyCallback] = None,
        discard_stale_fetches: bool = True
    ):
        self.store = store
        self.is_admin = is_admin
        self.confirm = confirm or _deny
        self.notify = notify or (lambda message: None)
        self.discard_stale_fetches = discard_stale_fetches

        self._models: ModelCollection = ()
        self._subscribers: List[Subscriber] = []
        self.state = FetchState.IDLE
        # SUCCESS or FAILED from the last applied fetch; None before the first one
        self.outcome: Optional[FetchState] = None
        self.error: Optional[str] = None
        self.last_error: Optional[ModelStoreError] = None

        # Request tokens for out-of-order completion handling
        self._issued = 0
        self._applied = 0
        self._in_flight = 0

        # Set by DashboardCoordinator.bind(); None means re-fetch locally
        self.request_refresh: Optional[Callable[[], Awaitable[Any]]] = None

    @property
    def models(self) -> ModelCollection:
        return self._models

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a snapshot subscriber; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def _publish(self, collection: ModelCollection) -> None:
        for callback in list(self._subscribers):
            await _resolve(callback(collection))

    def _is_stale(self, token: int) -> bool:
        return self.discard_stale_fetches and token < self._applied

    def _settle(self) -> None:
        self.state = FetchState.LOADING if self._in_flight else FetchState.IDLE

    async def fetch_all(self) -> ModelCollection:
        """
        Load the full collection from the store and publish it.

        State runs IDLE -> LOADING -> SUCCESS|FAILED -> IDLE; subscribers are
        called while the state is SUCCESS, and `outcome` keeps the result once
        the list is idle again. On failure the previous collection stays in
        place, the error flag is set and FetchFailed is raised. Nothing is
        retried.
        """
        try:
            return await self._fetch()
        finally:
            self._settle()

    async def _fetch(self) -> ModelCollection:
        self._issued += 1
        token = self._issued
        self._in_flight += 1
        self.state = FetchState.LOADING
        logger.debug("fetch #%d started", token)

        try:
            collection = await self.store.list_models()
        except ModelStoreError as e:
            if self._is_stale(token):
                logger.info("ignoring failure of stale fetch #%d: %s", token, e)
                return self._models
            self.error = FetchFailed.message
            self.last_error = e
            self.state = self.outcome = FetchState.FAILED
            logger.error("fetch #%d failed: %s", token, e)
            if isinstance(e, FetchFailed):
                raise
            raise FetchFailed(str(e), status=e.status) from e
        finally:
            self._in_flight -= 1

        if self._is_stale(token):
            logger.info("discarding stale fetch #%d (already applied #%d)", token, self._applied)
            return self._models

        self._applied = token
        self._models = tuple(collection)
        self.error = None
        self.last_error = None
        self.state = self.outcome = FetchState.SUCCESS
        logger.debug("fetch #%d loaded %d models", token, len(self._models))

        await self._publish(self._models)
        return self._models

    async def refetch(self) -> None:
        """Re-fetch for a refresh signal; failures stay in the error state."""
        try:
            await self.fetch_all()
        except FetchFailed:
            logger.debug("refresh left the list in error state: %s", self.error)

    async def on_refresh_epoch(self, epoch: int) -> None:
        logger.debug("refresh epoch %d observed", epoch)
        await self.refetch()

    async def _resync(self) -> None:
        if self.request_refresh is not None:
            await self.request_refresh()
        else:
            await self.refetch()

    async def _mutate(self, action: str, operation: Awaitable[Any]) -> None:
        try:
            await operation
        except ModelStoreError as e:
            logger.error("%s failed: %s", action, e)
            self.notify(str(e))
            raise
        logger.info("%s succeeded", action)
        await self._resync()

    async def create(self, draft: ModelDraft) -> None:
        """Submit a new record, then resynchronize from the store."""
        await self._mutate(f"create {draft.model_name!r}", self.store.create_model(draft))

    async def update(self, model_id, draft: ModelDraft) -> None:
        """Replace a record with the submitted draft, then resynchronize."""
        await self._mutate(f"update {model_id}", self.store.update_model(model_id, draft))

    async def delete(self, model_id, confirm: Optional[ConfirmCallback] = None) -> bool:
        """
        Delete a record after explicit confirmation.

        Returns False without sending anything when the confirmation is
        refused, True once the record was deleted and the list re-fetched.
        """
        confirmed = await _resolve((confirm or self.confirm)(DELETE_PROMPT))
        if not confirmed:
            logger.debug("delete %s not confirmed", model_id)
            return False

        await self._mutate(f"delete {model_id}", self.store.delete_model(model_id))
        return True

