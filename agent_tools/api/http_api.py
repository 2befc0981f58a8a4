"""
HTTP adapter for the image tools and the idle hook.

Endpoint responsibilities:
- `GET /tools`: list tool names, descriptions and JSON argument schemas.
- `POST /tools/{name}`: run a tool with a JSON argument object.
- `POST /events`: forward a host lifecycle event to the idle notifier.

Input validation behavior:
- Unknown tool name -> HTTP 404.
- Argument validation is delegated to the tool registry; invalid arguments
  come back as `{"result": "Error: ..."}` with HTTP 200, like any tool error.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Emits debug output only when `DEBUG == "true"`.
"""

from dotenv import load_dotenv

load_dotenv()

import os
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from agent_tools.config import mode_from_env
from agent_tools.notify import IdleNotifier
from agent_tools.tools import get_tool, tool_schemas

app = FastAPI(title="Agent Tools API")
DEBUG = os.getenv("DEBUG") == "true"

notifier = IdleNotifier.from_env()


class HookEvent(BaseModel):
    type: str
    properties: Optional[Dict[str, Any]] = None


@app.get("/tools")
def list_tools():
    return {"object": "list", "data": tool_schemas()}


@app.post("/tools/{name}")
def run_tool(name: str, args: Optional[Dict[str, Any]] = None):
    """Run one tool; the result string is returned whether or not it failed."""
    tool = get_tool(name)
    if tool is None:
        return JSONResponse(status_code=404, content={"error": f"Unknown tool: {name}"})

    if DEBUG:
        print(f"Running tool {name} with args: {args}")

    result = tool.execute(args or {}, mode=mode_from_env())
    return {"tool": name, "result": result}


@app.post("/events")
def handle_event(event: HookEvent):
    handled = notifier.handle_event(event.model_dump())
    return {"handled": handled}
