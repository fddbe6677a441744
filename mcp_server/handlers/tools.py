from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from tools import tool_listing

from ..errors import UnrecognizedOperation
from ..operations import call_tool
from ..services import Services, get_services

router = APIRouter(tags=["tools"])


@router.get("/tools")
async def list_tools():
    return {"tools": tool_listing()}


@router.post("/tools/{name}")
async def run_tool(
    name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    services: Services = Depends(get_services),
):
    """Invoke a tool. Tool failures come back as ``is_error`` results, not HTTP errors."""
    try:
        result = await call_tool(services, name, arguments)
    except UnrecognizedOperation as e:
        raise HTTPException(404, str(e))
    return {"name": name, "text": result.text, "is_error": result.is_error}
