"""JSON response envelope and the app-wide error handlers."""

from math import ceil
from typing import Any, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException

logger = structlog.get_logger()


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True)
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


def ok(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
    **extra: Any,
) -> JSONResponse:
    """{success: true, data, [message], **extra}."""
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body.update(extra)
    body["data"] = _dump(data)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def paginated(items: list, total: int, page: int, limit: int) -> JSONResponse:
    return ok(
        items,
        count=len(items),
        total=total,
        pagination={"page": page, "limit": limit, "pages": ceil(total / limit) if limit else 0},
    )


def _fail(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "message": message, **extra}),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(p) for p in err["loc"] if p not in ("body", "query", "path")),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return _fail(400, "Validation error", errors=errors)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return _fail(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("web.unhandled_error", path=request.url.path)
        return _fail(500, "Server error")
