"""
HTTP transport for seqthink.

This module exposes the sequential thinking server through a small tool-call API:
- **GET /health**         - liveness check.
- **GET /tools**          - list the tool descriptors the agent can discover.
- **POST /tools**         - register an extra tool descriptor: {"name": "...", ...}
- **POST /tools/call**    - invoke a tool: {"name": "...", "arguments": {...}}
- **POST /history/clear** - forget every recorded thought and branch.

Per-request problems (malformed calls, bad arguments, unknown tool names) come back as a tool
result with ``isError`` set, never as an HTTP fault.
"""

import json
import logging
from typing import (
    Any,
    Callable,
    Dict,
)

from fastapi import (
    FastAPI,
    Request,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from seqthink import __version__
from seqthink.api.models import (
    AddToolResponse,
    TextContent,
    ToolCallRequest,
    ToolCallResponse,
    ToolListResponse,
)
from seqthink.common import (
    AnsiColors,
    colored_print,
)
from seqthink.config import settings
from seqthink.core.thinking import (
    SequentialThinkingServer,
    failure_payload,
)
from seqthink.tools import (
    SEQUENTIAL_THINKING_TOOL_NAME,
    ToolDescriptor,
    load_tool_descriptors,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Dict[str, Any]]


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------
def _tool_result(payload: Dict[str, Any]) -> ToolCallResponse:
    """Wrap a handler payload in the tool-call envelope."""
    return ToolCallResponse(
        content=[TextContent(text=json.dumps(payload, indent=2, ensure_ascii=False))],
        is_error=payload.get("status") == "failed",
    )


def create_app(server: SequentialThinkingServer) -> FastAPI:
    """Build the API around an existing *server* (and therefore its ledger)."""
    app = FastAPI(
        title="seqthink API",
        version=__version__,
        description="Sequential thinking with tool recommendations",
    )
    app.state.server = server

    handlers: Dict[str, ToolHandler] = {
        SEQUENTIAL_THINKING_TOOL_NAME: server.process_thought,
    }

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report a request body that does not fit its model as a failed tool result."""
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"] if part != "body") or "body"
        message = f"Invalid {field}: {first['msg']}"
        logger.warning("Malformed request to %s: %s", request.url.path, message)
        result = _tool_result(failure_payload(message))
        return JSONResponse(result.model_dump(mode="json", by_alias=True))

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    @app.get("/health", summary="Health check")
    async def health() -> dict[str, str]:
        """Return a simple liveness payload."""
        return {"status": "ok"}

    @app.get("/tools", response_model=ToolListResponse, summary="List available tools")
    async def list_tools() -> ToolListResponse:
        """Return the tool catalog."""
        return ToolListResponse(tools=server.list_tools())

    @app.post("/tools", response_model=AddToolResponse, summary="Register a tool descriptor")
    async def add_tool(tool: ToolDescriptor) -> AddToolResponse:
        """Advertise *tool* to the agent; an existing name is left untouched."""
        added = server.catalog.add_tool(tool)
        return AddToolResponse(added=added, tools=server.catalog.names())

    @app.post("/tools/call", response_model=ToolCallResponse, summary="Call a tool")
    async def call_tool(req: ToolCallRequest) -> ToolCallResponse:
        """Dispatch *req* to the named tool handler."""
        handler = handlers.get(req.name)
        if handler is not None:
            return _tool_result(handler(req.arguments))
        if req.name in server.catalog:
            # Advertised tools from the catalog are run by the agent, not here.
            logger.warning("Call to discovery-only tool: %s", req.name)
            return _tool_result(
                failure_payload(f"Tool '{req.name}' is advertised only; the agent runs it")
            )
        logger.warning("Unknown tool requested: %s", req.name)
        return _tool_result(failure_payload(f"Unknown tool: {req.name}"))

    @app.post("/history/clear", summary="Clear thought history")
    async def clear_history() -> dict[str, str]:
        """Forget every recorded thought and branch."""
        server.clear_history()
        return {"status": "cleared"}

    @app.get("/", summary="API root")
    async def root() -> dict[str, str]:
        """Return a simple welcome message."""
        return {"message": "Welcome to the seqthink API! Use /docs for API documentation."}

    return app


def build_app() -> FastAPI:
    """
    Build the API from ``settings``.

    Raises
    ------
    ToolCatalogError
        If ``TOOLS_FILE`` is set but cannot be loaded.
    """
    tools = load_tool_descriptors(settings.TOOLS_FILE) if settings.TOOLS_FILE else []
    server = SequentialThinkingServer(
        max_history_size=settings.MAX_HISTORY_SIZE,
        available_tools=tools,
    )
    return create_app(server)


# ---------------------------------------------------------------------------
# Public helper to launch the API (imported by main.py)
# ---------------------------------------------------------------------------
def run_api(
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False,
    log_level: str | None = None,
    app: FastAPI | None = None,
) -> None:
    """Start a uvicorn server hosting the seqthink API.

    Parameters
    ----------
    host, port:
        Bind address for the HTTP server.
    reload:
        If *True*, enable auto-reload (useful in development).
    log_level:
        Logging level to use (default from settings if not provided).
    app:
        Prebuilt application to serve; built from settings when omitted.  Ignored with *reload*.
    Raises
    ------
    ToolCatalogError
        If the configured tool descriptors cannot be loaded.
    """

    # Lazy import - keeps uvicorn an optional dependency at pkg‑import time
    import uvicorn  # pylint: disable=import-outside-toplevel

    if log_level is None:  # Use the default from settings if not provided
        log_level = settings.LOG_LEVEL

    logger.info(
        "Starting seqthink API at %s:%d (reload=%s, log_level=%s)", host, port, reload, log_level
    )
    logger.debug("API settings: %s", settings.model_dump())

    if reload:
        # Reload needs an import string; the factory runs in the worker process,
        # so a bad catalog has to be caught here to stop startup.
        if settings.TOOLS_FILE:
            load_tool_descriptors(settings.TOOLS_FILE)
        colored_print(f"🧠 seqthink API is running at http://{host}:{port}.", AnsiColors.GREEN)
        uvicorn.run(
            "seqthink.api.app:build_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=log_level,
        )
    else:
        if app is None:
            app = build_app()
        colored_print(f"🧠 seqthink API is running at http://{host}:{port}.", AnsiColors.GREEN)
        uvicorn.run(app, host=host, port=port, log_level=log_level)


# ---------------------------------------------------------------------------
# `python -m seqthink.api.app` helper
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    run_api(reload=True)
