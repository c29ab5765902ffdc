#!/usr/bin/env python3
"""
modelboard API Schemas - Pydantic Models for Request/Response Validation
"""

from typing import Any, Dict, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

METRIC_FIELDS = ("accuracy", "precision", "recall", "f1_score")


class ModelRecord(BaseModel):
    # model_name clashes with pydantic's protected "model_" namespace
    model_config = ConfigDict(protected_namespaces=(), extra="allow", frozen=True)

    id: Union[int, str]
    model_name: str
    # Kept as sent by the server; the chart coerces them to float (NaN if unreadable)
    accuracy: Any = None
    precision: Any = None
    recall: Any = None
    f1_score: Any = None

    @field_validator("model_name", mode="before")
    @classmethod
    def name_as_text(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def metrics(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in METRIC_FIELDS}


class ModelDraft(BaseModel):
    """Create/edit form payload. Metrics must be finite numbers."""
    model_config = ConfigDict(protected_namespaces=())

    model_name: str = Field(..., min_length=1)
    accuracy: float = Field(..., allow_inf_nan=False)
    precision: float = Field(..., allow_inf_nan=False)
    recall: float = Field(..., allow_inf_nan=False)
    f1_score: float = Field(..., allow_inf_nan=False)


# Ordered, read-only snapshot of the last successful fetch
ModelCollection = Tuple[ModelRecord, ...]
