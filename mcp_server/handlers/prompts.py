import json
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from ..errors import UnrecognizedOperation
from ..prompts import PROMPTS, handle_prompt

router = APIRouter(tags=["prompts"])


@router.get("/prompts")
async def list_prompts():
    return {"prompts": PROMPTS}


@router.post("/prompts/{name}")
async def get_prompt(name: str, arguments: dict[str, Any] | None = Body(default=None)):
    try:
        text = handle_prompt(name, arguments or {})
    except UnrecognizedOperation as e:
        raise HTTPException(404, str(e))
    echo = f"Use the prompt: {name} {json.dumps(arguments) if arguments else ''}".rstrip()
    return {
        "name": name,
        "text": text,
        "messages": [
            {"role": "user", "content": {"type": "text", "text": echo}},
            {"role": "assistant", "content": {"type": "text", "text": text}},
        ],
    }
