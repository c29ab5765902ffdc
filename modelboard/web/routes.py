#!/usr/bin/env python3
"""
Dashboard Routes - Web UI and Template Rendering
"""

import logging
import math
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from ..api.schemas import ModelDraft, ModelRecord
from ..client.errors import ModelStoreError
from ..core.audit import audit_logger
from ..dashboard import DashboardCoordinator
from ..dashboard.models_list import DELETE_PROMPT
from .template_helpers import setup_template_filters

logger = logging.getLogger("modelboard.web")

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _json_safe(value: Any) -> Any:
    """Replace NaN scores with None so the chart can be sent as strict JSON."""
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def _form_errors(e: ValidationError) -> list:
    return [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]


def create_dashboard_routes(coordinator: DashboardCoordinator) -> APIRouter:
    """Create dashboard and web UI routes."""
    router = APIRouter()
    models_list = coordinator.models_list
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    setup_template_filters(templates)

    def require_admin() -> None:
        if not coordinator.is_admin:
            logger.warning("Mutation attempted without admin capability")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    def cached_record(model_id: str) -> Optional[ModelRecord]:
        for record in coordinator.models:
            if str(record.id) == model_id:
                return record
        return None

    async def find_record(model_id: str) -> ModelRecord:
        record = cached_record(model_id)
        if record is None:
            # Unknown to this process yet (e.g. right after a restart): ask the store
            await coordinator.request_refresh()
            record = cached_record(model_id)
        if record is not None:
            return record
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Model not found")

    def render_form(request: Request, record: Optional[ModelRecord], values: dict,
                    errors: Optional[list] = None, status_code: int = 200):
        return templates.TemplateResponse(request, "model_form.html", {
            "model": record,
            "values": values,
            "errors": errors or [],
        }, status_code=status_code)

    def back_to_dashboard() -> RedirectResponse:
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @router.get("/", response_class=HTMLResponse)
    async def dashboard_main(request: Request):
        """Main dashboard page - model count, cards and comparison chart."""
        logger.debug("Rendering main dashboard")
        # Opening the dashboard starts a new refresh epoch
        await coordinator.request_refresh()
        return templates.TemplateResponse(request, "dashboard.html", coordinator.get_dashboard_data())

    @router.post("/refresh")
    async def dashboard_refresh():
        await coordinator.request_refresh()
        return back_to_dashboard()

    @router.get("/api/chart")
    def chart_data():
        """Chart description as JSON; malformed scores are sent as null."""
        return JSONResponse(_json_safe(coordinator.chart))

    @router.get("/models/new", response_class=HTMLResponse, dependencies=[Depends(require_admin)])
    def new_model_form(request: Request):
        return render_form(request, None, {})

    @router.get("/models/{model_id}/edit", response_class=HTMLResponse, dependencies=[Depends(require_admin)])
    async def edit_model_form(model_id: str, request: Request):
        record = await find_record(model_id)
        values = {k: "" if v is None else v for k, v in record.metrics().items()}
        return render_form(request, record, {"model_name": record.model_name, **values})

    @router.post("/models", dependencies=[Depends(require_admin)])
    async def create_model(
        request: Request,
        model_name: str = Form(""),
        accuracy: str = Form(""),
        precision: str = Form(""),
        recall: str = Form(""),
        f1_score: str = Form(""),
    ):
        values = {"model_name": model_name, "accuracy": accuracy, "precision": precision,
                  "recall": recall, "f1_score": f1_score}
        try:
            draft = ModelDraft(**values)
        except ValidationError as e:
            return render_form(request, None, values, _form_errors(e), status_code=422)

        try:
            await models_list.create(draft)
            audit_logger.model_change("create", True, {"model_name": draft.model_name}, request)
        except ModelStoreError as e:
            audit_logger.model_change("create", False, {"model_name": draft.model_name, "error": str(e)}, request)
        return back_to_dashboard()

    @router.post("/models/{model_id}", dependencies=[Depends(require_admin)])
    async def update_model(
        model_id: str,
        request: Request,
        model_name: str = Form(""),
        accuracy: str = Form(""),
        precision: str = Form(""),
        recall: str = Form(""),
        f1_score: str = Form(""),
    ):
        record = await find_record(model_id)
        values = {"model_name": model_name, "accuracy": accuracy, "precision": precision,
                  "recall": recall, "f1_score": f1_score}
        try:
            draft = ModelDraft(**values)
        except ValidationError as e:
            return render_form(request, record, values, _form_errors(e), status_code=422)

        try:
            await models_list.update(record.id, draft)
            audit_logger.model_change("update", True, {"model_id": record.id}, request)
        except ModelStoreError as e:
            audit_logger.model_change("update", False, {"model_id": record.id, "error": str(e)}, request)
        return back_to_dashboard()

    @router.get("/models/{model_id}/delete", response_class=HTMLResponse, dependencies=[Depends(require_admin)])
    async def confirm_delete(model_id: str, request: Request):
        record = await find_record(model_id)
        return templates.TemplateResponse(request, "confirm_delete.html", {
            "model": record,
            "prompt": DELETE_PROMPT,
        })

    @router.post("/models/{model_id}/delete", dependencies=[Depends(require_admin)])
    async def delete_model(model_id: str, request: Request, confirm: str = Form("")):
        record = await find_record(model_id)
        try:
            deleted = await models_list.delete(record.id, confirm=lambda prompt: confirm == "yes")
        except ModelStoreError as e:
            audit_logger.model_change("delete", False, {"model_id": record.id, "error": str(e)}, request)
            return back_to_dashboard()

        if deleted:
            audit_logger.model_change("delete", True, {"model_id": record.id}, request)
        return back_to_dashboard()

    return router
