from __future__ import annotations

import logging
import time
import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chaos_api.config import Settings, load_settings
from chaos_api.interface.api.routes import auth_router, health_router, notes_router
from chaos_api.sessions import SessionStore
from chaos_api.vault import NoteVault


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="Chaos Notes API", version="0.1.0")

    settings = settings or load_settings()
    logger = logging.getLogger("chaos.api")
    logging.getLogger("chaos").setLevel(settings.log_level)

    app.state.settings = settings
    app.state.vault = NoteVault(settings.vault_dir, base_path=settings.base_path)
    app.state.sessions = SessionStore(settings)

    auth_prefix = f"{settings.base_path}/auth/"

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content={"error": "invalid_request"})

    @app.middleware("http")
    async def request_id_and_logging(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()

        path = request.url.path
        if path.startswith(settings.base_path + "/") and not path.startswith(auth_prefix):
            sessions: SessionStore = app.state.sessions
            if not sessions.is_authenticated(request.cookies.get(settings.session_cookie)):
                return JSONResponse(
                    status_code=401,
                    content={"error": "unauthorized"},
                    headers={"X-Request-ID": request_id},
                )

        try:
            response = await call_next(request)
        except Exception:
            dt_ms = (time.perf_counter() - start) * 1000.0
            logger.exception("request_error", extra={"rid": request_id, "path": path, "ms": dt_ms})
            return JSONResponse(
                status_code=500,
                content={"error": "internal_error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        dt_ms = (time.perf_counter() - start) * 1000.0
        record = {
            "rid": request_id,
            "method": request.method,
            "path": path,
            "status": response.status_code,
            "ms": dt_ms,
        }
        if settings.api_debug_log:
            record["query"] = request.url.query
        logger.info("request", extra=record)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(health_router)
    app.include_router(auth_router, prefix=settings.base_path)
    app.include_router(notes_router, prefix=settings.base_path)
    return app


app = create_app()
