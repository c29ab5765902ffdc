#!/usr/bin/env python3
"""
modelboard command line

Flow:
- Configuration comes from config.yaml (or --config), MODELBOARD_* env vars
  and command line overrides
- Every command starts a refresh epoch so the model list is loaded first
- list:   print the model count, the cards and a text rendering of the chart
- add / edit / delete: admin only (--admin or is_admin: true), each followed
  by one re-fetch; delete asks for confirmation unless --yes is given
- serve:  run the web dashboard with uvicorn
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import uvicorn
from pydantic import ValidationError

from .api.schemas import ModelDraft
from .client.errors import ModelStoreError
from .client.store import create_store
from .core.audit import audit_logger
from .core.config import DashboardConfig
from .dashboard import DashboardCoordinator, build_dashboard
from .web.app import create_app

logger = logging.getLogger("modelboard")

AUDIT_ACTIONS = {"add": "create", "edit": "update", "delete": "delete"}


def prompt_confirm(prompt: str) -> bool:
    """Interactive yes/no confirmation, defaulting to no."""
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def print_dashboard(data: Dict[str, Any]) -> None:
    """Text rendering of the dashboard data structure."""
    print(f"{data['page_title']} - {data['subtitle']}")
    print(f"Total Models: {data['total_models']}")
    if data["error"]:
        print(f"ERROR: {data['error']}")

    if not data["models"]:
        print(data["empty_message"])
    else:
        for card in data["models"]:
            metrics = "  ".join(f"{m['label']}: {m['value']}" for m in card["metrics"])
            print(f"  [{card['id']}] {card['model_name']:<24} {metrics}")

    chart = data["chart"]
    print()
    if chart["empty"]:
        print(chart["message"])
        return
    print(f"{chart['title']} (y: {chart['y_domain'][0]}-{chart['y_domain'][1]})")
    for group in chart["groups"]:
        print(f"  {group['name']}")
        for bar in group["bars"]:
            width = int((bar["height"] or 0) / 2.5)
            print(f"    {bar['key']:<10} {'#' * width:<40} {bar['label']}")


def draft_from_args(args: argparse.Namespace) -> ModelDraft:
    return ModelDraft(
        model_name=args.name,
        accuracy=args.accuracy,
        precision=args.precision,
        recall=args.recall,
        f1_score=args.f1_score,
    )


def find_model_id(coordinator: DashboardCoordinator, model_id: str):
    for record in coordinator.models:
        if str(record.id) == model_id:
            return record.id
    return None


async def run_command(config: DashboardConfig, args: argparse.Namespace) -> int:
    """Run one dashboard command; returns the process exit code."""
    coordinator = build_dashboard(
        create_store(config),
        is_admin=config.is_admin,
        discard_stale_fetches=config.discard_stale_fetches,
    )
    models_list = coordinator.models_list
    await coordinator.request_refresh()

    if args.command == "list":
        print_dashboard(coordinator.get_dashboard_data())
        return 1 if models_list.error else 0

    if not config.is_admin:
        print("ERROR: add/edit/delete require admin access (--admin)", file=sys.stderr)
        return 2

    action = AUDIT_ACTIONS[args.command]
    try:
        if args.command == "add":
            await models_list.create(draft_from_args(args))
            details = {"model_name": args.name}
        else:
            model_id = find_model_id(coordinator, args.id)
            if model_id is None:
                print(f"ERROR: no model with id {args.id}", file=sys.stderr)
                return 1
            details = {"model_id": model_id}
            if args.command == "edit":
                await models_list.update(model_id, draft_from_args(args))
            else:
                confirm = (lambda prompt: True) if args.yes else prompt_confirm
                if not await models_list.delete(model_id, confirm=confirm):
                    print("Delete cancelled.")
                    return 0
    except ValidationError as e:
        print(f"ERROR: invalid model: {e}", file=sys.stderr)
        return 2
    except ModelStoreError as e:
        audit_logger.model_change(action, False, {"error": str(e)})
        for alert in coordinator.pop_alerts():
            print(f"ERROR: {alert}", file=sys.stderr)
        return 1

    audit_logger.model_change(action, True, details)
    print_dashboard(coordinator.get_dashboard_data())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="modelboard - model evaluation metrics dashboard")
    parser.add_argument("--config", "-c", type=Path, default=Path("config.yaml"),
                        help="YAML configuration file (default: config.yaml)")
    parser.add_argument("--api-url", dest="api_url",
                        help="model store base URL (e.g., http://localhost:3000)")
    parser.add_argument("--admin", action="store_true",
                        help="enable add/edit/delete (the store still enforces authorization)")
    parser.add_argument("--log-level", dest="log_level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="show all models and the comparison chart")

    def add_metric_args(p):
        p.add_argument("--name", required=True, help="model name")
        p.add_argument("--accuracy", required=True)
        p.add_argument("--precision", required=True)
        p.add_argument("--recall", required=True)
        p.add_argument("--f1-score", dest="f1_score", required=True)

    add_metric_args(sub.add_parser("add", help="create a model record"))

    edit = sub.add_parser("edit", help="replace a model record")
    edit.add_argument("id", help="model id")
    add_metric_args(edit)

    delete = sub.add_parser("delete", help="delete a model record")
    delete.add_argument("id", help="model id")
    delete.add_argument("--yes", "-y", action="store_true", help="skip the confirmation prompt")

    serve = sub.add_parser("serve", help="run the web dashboard")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    return parser


def main():
    args = build_parser().parse_args()

    # Load config: YAML first, then CLI overrides
    config = DashboardConfig.from_file(args.config).override_with_args(args)

    # Configure logging
    logging.basicConfig(level=getattr(logging, config.log_level))
    logger.info("modelboard starting with config: api_url=%s, admin=%s", config.api_url, config.is_admin)

    if args.command == "serve":
        uvicorn.run(create_app(config), host=config.host, port=config.port, access_log=False)
        return

    try:
        sys.exit(asyncio.run(run_command(config, args)))
    except KeyboardInterrupt:
        print("\nInterrupted. Bye!")


if __name__ == "__main__":
    main()
