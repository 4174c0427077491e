from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.cnpj import router as cnpj_router
from app.api.v1.nr04 import router as nr04_router
from app.config import settings
from app.core.exceptions import AppError
from app.core.logging import get_logger, setup_logging
from app.database import create_db_engine
from app.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from app.schemas.api_responses import AboutResponse, ErrorResponse
from app.storage.base import Storage
from app.storage.sql import SqlAlchemyStorage

APP_VERSION = "1.0.0"
logger = get_logger(__name__)


def _get_request_id(request: Request) -> str | None:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    return request.headers.get(REQUEST_ID_HEADER)


def _error_response(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(
        error={
            "code": code,
            "message": message,
            "request_id": _get_request_id(request),
        }
    )
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    owned = app.state.storage is None
    if owned:
        storage = SqlAlchemyStorage(create_db_engine(settings))
        storage.connect()
        app.state.storage = storage

    logger.info("api.startup", version=APP_VERSION)
    try:
        yield
    finally:
        if owned:
            app.state.storage.close()
            app.state.storage = None
        logger.info("api.shutdown")


def create_app(storage: Storage | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="API de consulta ao cadastro CNPJ importado da Receita Federal",
        version=APP_VERSION,
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
        openapi_tags=[
            {"name": "cnpj", "description": "Consulta de estabelecimento por CNPJ"},
            {"name": "nr04", "description": "Grau de risco por grupo CNAE"},
        ],
        lifespan=lifespan,
    )
    app.state.storage = storage

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(cnpj_router, prefix=settings.API_V1_PREFIX)
    app.include_router(nr04_router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(AppError)
    def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("api.app_error", code=exc.code, message=exc.message)
        return _error_response(request, exc.status_code, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Dados de requisicao invalidos") if errors else "Dados de requisicao invalidos"
        return _error_response(request, 422, "VALIDATION_ERROR", message)

    @app.exception_handler(Exception)
    def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("api.unhandled_exception", path=request.url.path)
        return _error_response(request, 500, "INTERNAL_ERROR", "Erro interno")

    @app.get("/about", response_model=AboutResponse, summary="Versao da API")
    def about() -> AboutResponse:
        return AboutResponse(name=settings.APP_NAME, version=APP_VERSION)

    return app


app = create_app()
