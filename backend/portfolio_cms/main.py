"""
FastAPI entry point for the Portfolio CMS

Serves the credential service and record stores under /api/v1. The first
start seeds the default admin and the default page sections.

Usage:
    uvicorn portfolio_cms.main:app --reload
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_cms import __version__
from portfolio_cms.api.api_v1.api import api_router
from portfolio_cms.container import get_container
from portfolio_cms.core.config import settings
from portfolio_cms.core.exceptions import PortfolioError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Error code -> HTTP status for PortfolioErrors that reach the app
_STATUS_BY_CODE = {
    "NOT_FOUND": 404,
    "INVALID_RECORD": 422,
}

app = FastAPI(
    title="Portfolio CMS API",
    description="Admin login, project showcase, page sections and team members",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Process-Time"] = f"{time.perf_counter() - started:.6f}"
    return response


app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    config = get_container().settings
    return {
        "status": "healthy",
        "version": __version__,
        "environment": config.ENVIRONMENT,
        "store_backend": config.STORE_BACKEND,
        "timestamp": time.time(),
    }


@app.get("/")
async def root():
    return {"message": "Portfolio CMS API", "version": __version__, "docs": "/docs", "health": "/health"}


@app.exception_handler(PortfolioError)
async def portfolio_error_handler(request: Request, exc: PortfolioError):
    status_code = _STATUS_BY_CODE.get(exc.code, 500)
    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"success": False, **exc.to_dict()})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "message": "An unexpected error occurred"},
    )


@app.on_event("startup")
async def startup_event():
    container = get_container()
    logger.info(f"Starting Portfolio CMS API {__version__} ({container.settings.ENVIRONMENT})")
    container.bootstrap()
    logger.info("Application startup complete")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("portfolio_cms.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG, log_level="info")
