"""Global error handlers ensuring request_id is included in JSON responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from streakboard.domain.leaderboards.errors import LeaderboardPersistError, UserNotFoundError
from streakboard.obs import logging as obs_logging


def _request_id(request: Request) -> str:
	return getattr(request.state, "request_id", None) or obs_logging.current_request_id() or "unknown"


def install_error_handlers(app: FastAPI) -> None:
	@app.exception_handler(StarletteHTTPException)
	async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
		payload = {"detail": exc.detail, "request_id": _request_id(request)}
		return JSONResponse(status_code=exc.status_code, content=payload)

	@app.exception_handler(RequestValidationError)
	async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
		payload = {"detail": "validation_error", "errors": exc.errors(), "request_id": _request_id(request)}
		return JSONResponse(status_code=422, content=payload)

	@app.exception_handler(UserNotFoundError)
	async def user_not_found_handler(request: Request, exc: UserNotFoundError):  # type: ignore[override]
		payload = {"detail": "user_not_found", "request_id": _request_id(request)}
		return JSONResponse(status_code=404, content=payload)

	@app.exception_handler(LeaderboardPersistError)
	async def persist_error_handler(request: Request, exc: LeaderboardPersistError):  # type: ignore[override]
		payload = {
			"detail": "leaderboard_persist_failed",
			"period": exc.period,
			"batch_index": exc.batch_index,
			"request_id": _request_id(request),
		}
		return JSONResponse(status_code=503, content=payload)
