from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.api_response import ApiResponse

logger = logging.getLogger(__name__)


def format_error_details(errors: List[Dict[str, Any]]) -> List[str]:
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        field = ".".join(loc) or "body"
        message = re.sub(re.escape("value error, "), "", error.get("msg", ""), flags=re.IGNORECASE)
        messages.append(f"{field}: {message}")
    return messages


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = format_error_details(exc.errors())
    logger.warning(
        "request rejected before reaching handler: %s",
        "; ".join(messages),
        extra={"endpoint": request.url.path, "method": request.method},
    )
    envelope = ApiResponse.failure(status.HTTP_400_BAD_REQUEST, messages)
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_content())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
