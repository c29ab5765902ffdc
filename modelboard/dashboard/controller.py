"""
Dashboard Controller

Composition root of the dashboard. Owns the refresh epoch and the last
published model collection, and hands that snapshot to the chart projection.
All methods return Python data structures that are easily debuggable and testable.
"""

import time
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..api.schemas import ModelCollection, ModelRecord
from .chart import build_chart, format_score
from .models_list import ModelListController

logger = logging.getLogger("modelboard.dashboard")

EpochListener = Callable[[int], Awaitable[Any]]

# Card metric rows: (label, record field)
CARD_METRICS = [
    ("Accuracy", "accuracy"),
    ("Precision", "precision"),
    ("Recall", "recall"),
    ("F1 Score", "f1_score"),
]


class DashboardCoordinator:
    """
    Top-level dashboard state: refresh epoch, last published collection and
    the chart derived from it.

    The coordinator never fetches or mutates records itself; it signals
    refreshes and caches whatever the models list publishes.
    """

    def __init__(self, is_admin: bool = False):
        self.is_admin = is_admin
        self.refresh_epoch = 0
        self.models: ModelCollection = ()
        self.chart: Dict[str, Any] = build_chart(self.models)
        self.alerts: List[str] = []
        self.models_list: Optional[ModelListController] = None
        self._epoch_listeners: List[EpochListener] = []

    def bind(self, models_list: ModelListController) -> "DashboardCoordinator":
        """Wire a models list: its snapshots flow in, refresh epochs flow out."""
        self.models_list = models_list
        models_list.subscribe(self.on_collection_published)
        models_list.request_refresh = self.request_refresh
        models_list.notify = self.push_alert
        self.subscribe_refresh(models_list.on_refresh_epoch)
        return self

    def subscribe_refresh(self, listener: EpochListener) -> None:
        self._epoch_listeners.append(listener)

    async def request_refresh(self) -> int:
        """Bump the refresh epoch and let every observer re-fetch."""
        self.refresh_epoch += 1
        epoch = self.refresh_epoch
        logger.debug("refresh requested, epoch=%d", epoch)
        for listener in list(self._epoch_listeners):
            await listener(epoch)
        return epoch

    def on_collection_published(self, collection: ModelCollection) -> None:
        """Cache a new snapshot and re-derive the chart from it."""
        self.models = tuple(collection)
        self.chart = build_chart(self.models)
        logger.debug("collection published: %d models", len(self.models))

    def push_alert(self, message: str) -> None:
        self.alerts.append(message)

    def pop_alerts(self) -> List[str]:
        """Return pending dismiss-only alerts and clear them."""
        alerts, self.alerts = self.alerts, []
        return alerts

    def get_dashboard_data(self) -> Dict[str, Any]:
        """
        Get complete dashboard data structure.

        Returns a dictionary with all data needed to render the dashboard:
        model count, cards, admin affordances, error/loading state and the
        chart (or its empty-state placeholder).
        """
        models_list = self.models_list
        error = models_list.error if models_list else None
        loading = models_list.loading if models_list else False

        dashboard_data = {
            "page_title": "Machine Learning Models",
            "subtitle": "CICIDS-2017 Dataset Evaluation Metrics",
            "timestamp": int(time.time()),
            "refresh_epoch": self.refresh_epoch,
            "is_admin": self.is_admin,
            "show_add_button": self.is_admin,
            "total_models": len(self.models),
            "models": [self._build_card(record) for record in self.models],
            "empty_message": self._empty_message() if not self.models else None,
            "loading": loading,
            "error": error,
            "alerts": self.pop_alerts(),
            "chart": self.chart,
        }
        logger.debug("Dashboard data prepared: %d models", dashboard_data["total_models"])
        return dashboard_data

    def _empty_message(self) -> str:
        if self.is_admin:
            return "No models found. Add your first model to get started!"
        return "No models found."

    def _build_card(self, record: ModelRecord) -> Dict[str, Any]:
        return {
            "id": record.id,
            "model_name": record.model_name,
            "metrics": [
                {"label": label, "value": format_score(getattr(record, field))}
                for label, field in CARD_METRICS
            ],
            "can_edit": self.is_admin,
            "can_delete": self.is_admin,
        }


def build_dashboard(store, is_admin: bool = False, discard_stale_fetches: bool = True) -> DashboardCoordinator:
    """Create a coordinator with a models list bound to the given store."""
    models_list = ModelListController(
        store,
        is_admin=is_admin,
        discard_stale_fetches=discard_stale_fetches,
    )
    return DashboardCoordinator(is_admin=is_admin).bind(models_list)
