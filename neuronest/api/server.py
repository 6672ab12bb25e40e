"""
neuronest/api/server.py

JSON HTTP server for the bot endpoints.

Routes:
  GET  /health              -> {"ok": true}
  POST /bots/sales          -> BotRouteHandler.sales
  POST /bots/lease          -> BotRouteHandler.lease
  POST /bots/case-study     -> BotRouteHandler.case_study
  POST /bots/description    -> BotRouteHandler.description

Usage:
  httpd = build_server(Settings.from_env(), "0.0.0.0", 8080)
  httpd.serve_forever()
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional

from neuronest.api.handlers import BotRouteHandler, error_response
from neuronest.api.store import JsonFileStore, RecordStore
from neuronest.bots.features.completion_client.completion_client import CompletionClient
from neuronest.bots.models import BotType
from neuronest.bots.orchestrator import BotOrchestrator
from neuronest.config import Settings
from neuronest.errors import ValidationError

logger = logging.getLogger(__name__)

BOT_PATHS = {f"/bots/{t.value}": t for t in BotType}


class BotRequestHandler(BaseHTTPRequestHandler):
    # set on the subclass built by build_server
    routes: Optional[BotRouteHandler] = None

    def do_GET(self):
        if self.path.split("?", 1)[0] == "/health":
            self.serve_json(200, {"ok": True})
        else:
            self.serve_json(404, {"success": False, "message": "Not found"})

    def do_POST(self):
        bot_type = BOT_PATHS.get(self.path.split("?", 1)[0].rstrip("/"))
        if bot_type is None:
            self.serve_json(404, {"success": False, "message": "Not found"})
            return

        try:
            body = self.read_json()
        except ValidationError as e:
            self.serve_json(*error_response(e))
            return

        try:
            status, payload = self.routes.dispatch(bot_type, self.headers.get("Authorization"), body)
        except Exception:
            logger.exception(f"Unhandled error on {self.path}")
            status, payload = 500, {"success": False, "message": "Server error"}
        self.serve_json(status, payload)

    def read_json(self) -> Any:
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError as e:
            raise ValidationError("Invalid Content-Length header") from e
        raw = self.rfile.read(length) if length > 0 else b""
        if not raw:
            raise ValidationError("Request body is required")
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValidationError("Request body must be valid JSON") from e

    def serve_json(self, status: int, data: Dict[str, Any]):
        body = json.dumps(data).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info(f"{self.address_string()} - {format % args}")


def build_server(
    settings: Settings,
    host: str = "0.0.0.0",
    port: int = 8080,
    orchestrator: Optional[BotOrchestrator] = None,
    store: Optional[RecordStore] = None,
) -> ThreadingHTTPServer:
    """
    Wire settings, orchestrator and store into a ready-to-serve HTTP server.

    Collaborators not passed in are built from `settings`.
    """
    if orchestrator is None:
        orchestrator = BotOrchestrator(CompletionClient.from_settings(settings))
    if store is None:
        store = JsonFileStore(settings.store_path)

    handler_cls = type(
        "BoundBotRequestHandler",
        (BotRequestHandler,),
        {"routes": BotRouteHandler(orchestrator, store, settings)},
    )
    return ThreadingHTTPServer((host, port), handler_cls)


def serve(settings: Settings, host: str = "0.0.0.0", port: int = 8080) -> None:
    httpd = build_server(settings, host, port)

    print("🚀 NeuroNest Bot Service")
    print(f"🌐 Listening on http://{host}:{port}")
    print("=" * 50)

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\n👋 Shutting down...")
    finally:
        httpd.server_close()
