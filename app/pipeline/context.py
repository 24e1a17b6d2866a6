# =============================================================================
# app/pipeline/context.py - Request Context and Stage Results
# =============================================================================
# A stage receives the RequestContext and returns either:
#   Continue()      - hand the (possibly mutated) context to the next stage
#   Halt(response)  - stop here and send this response
#
# Expected rejections (bad input, missing token, wrong role) are Halt
# results. Only unexpected failures are raised.
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from fastapi import Request
from starlette.responses import Response

from app.auth.models import Principal
from app.exceptions import envelope_response

# Methods whose body is parsed into the context
BODY_METHODS = {"POST", "PUT", "PATCH"}


@dataclass(frozen=True)
class Continue:
    """Proceed to the next stage."""


@dataclass(frozen=True)
class Halt:
    """Short-circuit the pipeline with a terminal response."""

    response: Response


StageResult = Continue | Halt

CONTINUE = Continue()


@dataclass
class RequestContext:
    """
    Mutable per-request state threaded through the pipeline.

    body, query and params are plain dicts so stages can read and rewrite
    them without touching the framework request.
    """

    request: Request
    body: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    principal: Principal | None = None

    @classmethod
    async def from_request(cls, request: Request) -> "RequestContext | Halt":
        """
        Build a context from an incoming request.

        Returns a Halt (400) when the body is not a JSON object.
        """
        body: dict[str, Any] = {}
        if request.method in BODY_METHODS:
            raw = await request.body()
            if raw.strip():
                try:
                    parsed = json.loads(raw)
                except (json.JSONDecodeError, UnicodeDecodeError):
                    return Halt(envelope_response(400, "Malformed JSON body"))
                if not isinstance(parsed, dict):
                    return Halt(envelope_response(400, "Request body must be a JSON object"))
                body = parsed

        return cls(
            request=request,
            body=body,
            query=dict(request.query_params),
            params=dict(request.path_params),
        )


Stage = Callable[[RequestContext], Awaitable[StageResult]]
Handler = Callable[[RequestContext], Awaitable[Response]]
