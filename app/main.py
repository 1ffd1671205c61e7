from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager
import logging
import os

from app.database import engine, Base
import app.models  # noqa: F401 (registers all models)
from app.config import settings
from app.errors import AppError, StoreFailure
from app.routers import health, people, territories, history, groups, campaigns, assignments, dashboard

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Ensure DB and upload dir exist and tables are created
    os.makedirs("data", exist_ok=True)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Servidor iniciado (%s)", settings.APP_ENV)

    yield

    await engine.dispose()


app = FastAPI(
    title="Gerenciador de Territórios",
    description="Controle de designação de territórios",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.APP_ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


# --- Error mapping: every failure answers {"error": message} ---
@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}" for err in exc.errors()
    )
    logger.warning("%s %s: %s", request.method, request.url.path, details)
    return JSONResponse(status_code=400, content={"error": f"Dados inválidos: {details}"})


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.error("Erro no banco de dados em %s %s", request.method, request.url.path, exc_info=exc)
    return await handle_app_error(request, StoreFailure("Erro interno do servidor."))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error("Erro inesperado em %s %s", request.method, request.url.path, exc_info=exc)
    return await handle_app_error(request, StoreFailure("Erro interno do servidor."))


app.include_router(health.router)
app.include_router(people.router)
app.include_router(territories.router)
app.include_router(history.router)
app.include_router(groups.router)
app.include_router(campaigns.router)
app.include_router(assignments.router)
app.include_router(dashboard.router)
