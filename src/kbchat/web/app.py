"""FastAPI application exposing the knowledge-grounded chat endpoint."""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Union

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from kbchat.config import AppConfig
from kbchat.index.search import SectionSelector
from kbchat.llm.anthropic import AnthropicClient, LLMError
from kbchat.models import ChatMessage, Role, latest_user_message
from kbchat.prompt import build_system_prompt
from kbchat.utils.files import load_knowledge_base

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="kbchat", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


class MessagePayload(BaseModel):
    role: Role
    content: Union[str, List[Dict[str, Any]]]


class ChatPayload(BaseModel):
    messages: List[MessagePayload] = Field(default_factory=list)


def _error_response(
    status_code: int, message: str, headers: Dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        return _error_response(405, "Method not allowed", exc.headers)
    return _error_response(exc.status_code, str(exc.detail), exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report body errors as ``{"error": ...}``, using 400 for unusable bodies."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return _error_response(400, "Invalid JSON body.")
    # body missing, not an object, or messages not a list
    if any(tuple(error.get("loc", ())) in {("body",), ("body", "messages")} for error in errors):
        return _error_response(400, "messages array is required.")

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "invalid value")
    return _error_response(422, f"Invalid message at {location}: {message}")


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig.from_env()


@lru_cache(maxsize=1)
def get_selector() -> SectionSelector:
    """Load the knowledge base once per process and wrap it in a selector."""
    config = get_config()
    knowledge_base = load_knowledge_base(config.resolve_knowledge_path(Path.cwd()))
    LOGGER.info(
        "Knowledge base loaded from %s (%d characters)",
        knowledge_base.source,
        len(knowledge_base.text),
    )
    return SectionSelector(knowledge_base)


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    get_selector()


@app.get("/health")
async def health(selector: SectionSelector = Depends(get_selector)) -> dict[str, Any]:
    return {"status": "ok", "sections": len(selector.sections)}


@app.post("/chat")
async def chat(
    payload: ChatPayload,
    config: AppConfig = Depends(get_config),
    selector: SectionSelector = Depends(get_selector),
) -> Dict[str, Any]:
    if not config.api_key:
        raise HTTPException(
            status_code=500, detail="ANTHROPIC_API_KEY not set in environment variables."
        )
    if not payload.messages:
        raise HTTPException(status_code=400, detail="messages array is required.")

    messages = [ChatMessage(role=m.role, content=m.content) for m in payload.messages]
    relevant = selector.select(latest_user_message(messages))
    system_prompt = build_system_prompt(relevant)

    client = AnthropicClient(config)
    try:
        return await asyncio.to_thread(client.create_message, system_prompt, messages)
    except LLMError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
