"""
Quiz API Server

FastAPI server with:
- Quiz CRUD with structural validation
- Attempt submission with server-side scoring
- Attempt history, review and analytics
- JWT bearer authentication
- SQLite document store opened/closed by the app lifespan
"""

import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app_state
from config import AppConfig
from quiz.exceptions import QuizAPIError
from routers import analytics_router, attempts_router, quizzes_router, users_router

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIGURATION
# =============================================================================

config = AppConfig.from_env()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


# =============================================================================
# FASTAPI APP
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info("Starting Quiz API...")
    app_state.init(AppConfig.from_env())
    yield
    app_state.cleanup()
    logger.info("Quiz API stopped")


app = FastAPI(
    title="Quiz API",
    description="Quiz platform backend: quizzes, attempts and analytics",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLERS
# =============================================================================


@app.exception_handler(QuizAPIError)
async def quiz_api_error_handler(request: Request, exc: QuizAPIError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Validation Error", "errors": errors},
    )


@app.exception_handler(sqlite3.Error)
async def database_error_handler(request: Request, exc: sqlite3.Error):
    logger.error(f"Erro de banco em {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


# =============================================================================
# ROUTERS
# =============================================================================

app.include_router(users_router, prefix="/api")
app.include_router(quizzes_router, prefix="/api")
app.include_router(analytics_router, prefix="/api")
app.include_router(attempts_router, prefix="/api")


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/health")
async def health_check():
    """Detailed health check."""
    database = app_state.database
    return {
        "status": "healthy",
        "environment": app_state.get_config().environment,
        "database": "ok" if database is not None and database.ping() else "unavailable",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port)
