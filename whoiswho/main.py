# /whoiswho/main.py
"""
Main application module for the API.
This is the entry point that initializes the FastAPI app and includes all routes.
"""
import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from whoiswho.api.router import router
from whoiswho.config import Settings
from whoiswho.errors import ErrorCode, WhoIsWhoError
from whoiswho.services import Services, build_services

# Logging setup - direct to stdout
logging.basicConfig(
    level=logging.INFO,
    stream=sys.stdout,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    force=True  # Override any previous configuration
)

logger = logging.getLogger(__name__)


def create_app(services: Optional[Services] = None) -> FastAPI:
    """Build the app. Services are created at startup unless supplied."""
    app = FastAPI(
        title="WhoIsWho API",
        description="Aggregated Farcaster profiles, deployed tokens, reputation scores and profile snapshots"
    )
    app.state.services = services

    @app.exception_handler(WhoIsWhoError)
    async def whoiswho_error_handler(request: Request, exc: WhoIsWhoError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(
            status_code=400,
            content={"error": message, "code": ErrorCode.INVALID_INPUT.value},
        )

    @app.on_event("startup")
    async def startup_event():
        """Build the shared http client and aggregators when the app starts up"""
        logger.info("=== API STARTING UP ===")
        if app.state.services is None:
            settings = Settings.from_env()
            app.state.services = build_services(settings)
            logger.info(f"Neynar: {'✓' if settings.neynar_api_key else '✗'}")
            logger.info(f"Pinata: {'✓' if settings.pinata_jwt else '✗'}")
        logger.info("=== API READY ===")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Close the shared http client when the app shuts down"""
        logger.info("=== SHUTTING DOWN API ===")
        if app.state.services is not None:
            await app.state.services.close()

    # Root endpoint
    @app.get("/")
    async def root():
        return {"message": "WhoIsWho API is running"}

    # Include all routes with api prefix
    app.include_router(router, prefix="/api")
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("whoiswho.main:app", host="0.0.0.0", port=8000, reload=True)
