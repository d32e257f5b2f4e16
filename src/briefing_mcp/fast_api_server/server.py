# Tool server for the news briefing agent.
# Run standalone with: uvicorn briefing_mcp.fast_api_server.server:app --port 4000
#
# The briefing-agent entry point starts the same app in a background thread.

import threading
import time
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from briefing_mcp.app.main import process
from briefing_mcp.mcp.router import check_handlers
from briefing_shared.tool_registry import ToolRegistry
from briefing_shared.tool_schemas import build_default_registry


def _to_fastapi_response(resp: dict[str, Any]) -> Response:
    """Convert a process() response dict into a FastAPI Response."""
    status_code = resp.get("statusCode", 200)
    content_type = resp.get("headers", {}).get("Content-Type", "application/json")
    body = resp.get("body", "")
    return Response(content=body, status_code=status_code, media_type=content_type)


def create_app(registry: ToolRegistry | None = None) -> FastAPI:
    """
    Build the tool server. One POST route is mounted per registered tool.

    Raises:
        RegistryError: If a registered tool has no handler.
    """
    registry = registry or build_default_registry()
    check_handlers(registry)

    app = FastAPI(title="News Briefing Tool Server")

    async def _process_request(request: Request) -> Response:
        body = await request.body()
        event = {
            "routeKey": f"{request.method} {request.url.path}",
            "body": body,
            "headers": dict(request.headers),
        }
        resp = await run_in_threadpool(process, event, registry)
        return _to_fastapi_response(resp)

    for name, path in registry.routes().items():
        app.add_api_route(path, _process_request, methods=["POST"], name=name)

    app.add_api_route("/mcp/tools", _process_request, methods=["GET"], name="list_tools")

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    return app


app: FastAPI = create_app()


class ToolServer:
    """
    Run the tool server with uvicorn in a background thread.

    uvicorn does not install signal handlers outside the main thread, so the owner
    of this object is responsible for calling `stop()` on shutdown.
    """

    def __init__(
        self,
        fastapi_app: FastAPI,
        host: str = "127.0.0.1",
        port: int = 4000,
        log_level: str = "warning",
    ) -> None:
        self.host = host
        self.port = port
        self.server = uvicorn.Server(
            uvicorn.Config(fastapi_app, host=host, port=port, log_level=log_level)
        )
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, timeout: float = 10.0) -> None:
        """Start serving and block until the socket is bound."""
        self._thread = threading.Thread(target=self.server.run, name="tool-server", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + timeout
        while not self.server.started:
            if not self._thread.is_alive():
                raise RuntimeError(f"Tool server failed to start on {self.host}:{self.port}")
            if time.monotonic() > deadline:
                self.stop()
                raise RuntimeError(f"Tool server did not start within {timeout} seconds")
            time.sleep(0.05)

    def stop(self, timeout: float = 5.0) -> None:
        self.server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
