"""
Chart projection

Pure transforms from a model collection into chart-ready series data.
Nothing here performs I/O or mutates its input.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..api.schemas import ModelRecord

Y_DOMAIN: Tuple[float, float] = (0.5, 1.0)

# (series key, bar colour)
CHART_BARS = [
    ("Accuracy", "#3b82f6"),
    ("Precision", "#f59e0b"),
    ("Recall", "#10b981"),
    ("F1", "#ef4444"),
]

EMPTY_CHART_MESSAGE = "No models available to display. Add models to see the comparison chart."


@dataclass(frozen=True)
class ChartSeriesPoint:
    """One bar group: a model name and its four scores."""
    name: str
    accuracy: float
    precision: float
    recall: float
    f1: float

    def as_series(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "Accuracy": self.accuracy,
            "Precision": self.precision,
            "Recall": self.recall,
            "F1": self.f1,
        }


def parse_score(value: Any) -> float:
    """Coerce a metric to float; anything unparseable becomes NaN."""
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def project(collection: Iterable[ModelRecord]) -> List[ChartSeriesPoint]:
    """Project records into series points, preserving order and count."""
    return [
        ChartSeriesPoint(
            name=record.model_name,
            accuracy=parse_score(record.accuracy),
            precision=parse_score(record.precision),
            recall=parse_score(record.recall),
            f1=parse_score(record.f1_score),
        )
        for record in collection
    ]


def scale_to_domain(value: float, domain: Tuple[float, float] = Y_DOMAIN) -> Optional[float]:
    """
    Bar height as a percentage of the plot area.

    Values outside the axis window are clipped for display only; NaN has
    no bar at all.
    """
    if value is None or math.isnan(value):
        return None
    low, high = domain
    fraction = (value - low) / (high - low)
    return round(min(max(fraction, 0.0), 1.0) * 100, 2)


def format_score(value: Any) -> str:
    """Tooltip format: fraction as a percentage with two decimals."""
    score = parse_score(value)
    if math.isnan(score):
        return "—"
    return f"{score * 100:.2f}%"


def build_chart(collection: Iterable[ModelRecord]) -> Dict[str, Any]:
    """
    Get the complete chart description for a collection.

    An empty collection yields the empty-state placeholder instead of a
    chart frame with no bars.
    """
    points = project(collection)
    if not points:
        return {"empty": True, "message": EMPTY_CHART_MESSAGE}

    series = [point.as_series() for point in points]
    groups = []
    for row in series:
        groups.append({
            "name": row["name"],
            "bars": [
                {
                    "key": key,
                    "color": color,
                    "value": row[key],
                    "height": scale_to_domain(row[key]),
                    "label": format_score(row[key]),
                }
                for key, color in CHART_BARS
            ],
        })

    return {
        "empty": False,
        "title": "Comparison of Evaluation Metrics Across Models",
        "subtitle": "Interactive visualization of model performance",
        "y_domain": list(Y_DOMAIN),
        "y_label": "Score",
        "bars": [{"key": key, "color": color} for key, color in CHART_BARS],
        "series": series,
        "groups": groups,
    }
