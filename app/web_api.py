"""FastAPI application exposing the task command interpreter over HTTP."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.main import build_controller
from core.command_parser import parse_command
from core.controller import TaskController
from core.exceptions import CommandError

logger = logging.getLogger(__name__)


class CommandRequest(BaseModel):
    message: str


class ParseRequest(BaseModel):
    message: str
    reference: Optional[datetime] = None


def create_app(controller: Optional[TaskController] = None) -> FastAPI:
    """WHAT: instantiate FastAPI around a single task controller.

    WHY: the HTTP surface reuses the same controller wiring as the CLI so a
    command typed in either place behaves identically.
    HOW: accept a controller override (tests), stash it on ``app.state`` and
    register the health, command and parse routes.
    """
    app = FastAPI(title="quicktodo API", version="1.0.0")
    app.state.controller = controller or build_controller()

    def _require_message(message: str) -> str:
        clean = (message or "").strip()
        if not clean:
            raise HTTPException(status_code=400, detail="Message is required.")
        return clean

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        """Cheap uptime probe that never touches the task store."""
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.post("/api/command")
    def run_command(payload: CommandRequest) -> Dict[str, Any]:
        """WHAT: execute one command line and return the controller response.

        WHY: clients render ``text`` and the numbered ``tasks`` list exactly as
        the CLI would.
        HOW: rejected commands are still HTTP 200 with ``success`` false so the
        client can show the message inline.
        """
        message = _require_message(payload.message)
        response = app.state.controller.handle_message(message)
        return response.to_dict()

    @app.post("/api/parse")
    def parse_only(payload: ParseRequest) -> Any:
        message = _require_message(payload.message)
        try:
            command = parse_command(message, reference=payload.reference)
        except CommandError as exc:
            logger.info("Parse rejected %r: %s", message, exc.kind)
            return JSONResponse(
                status_code=422,
                content={"error_kind": exc.kind, "message": exc.user_message},
            )
        return {"intent": command.intent.value, "command": command.to_payload()}

    return app


if __name__ == "__main__":
    import uvicorn
    from app.config import get_web_host, get_web_port

    uvicorn.run(
        "app.web_api:create_app",
        factory=True,
        host=get_web_host(),
        port=get_web_port(),
        reload=False,
    )
