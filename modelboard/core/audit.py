#!/usr/bin/env python3
"""
Audit trail for admin edits to the model store.

Every create/update/delete attempt, accepted or rejected by the store, is
written as one JSON line on the "modelboard.audit" logger.
"""

import json
import logging
import time
from typing import Any, Dict, Optional

from fastapi import Request


class AuditLogger:
    """JSON-lines writer for model store changes."""

    def __init__(self, name: str = "modelboard.audit"):
        self.logger = logging.getLogger(name)

    @staticmethod
    def _origin(request: Request) -> Dict[str, Any]:
        return {
            "client_ip": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
        }

    def model_change(self, action: str, success: bool, details: Dict[str, Any],
                     request: Optional[Request] = None):
        """Record one mutation attempt; `request` is None for CLI commands."""
        entry = {
            "ts": int(time.time()),
            "event": f"model.{action}",
            "outcome": "ok" if success else "rejected",
            **details,
        }
        if request is not None:
            entry["origin"] = self._origin(request)

        level = logging.INFO if success else logging.WARNING
        self.logger.log(level, json.dumps(entry, default=str))


audit_logger = AuditLogger()
