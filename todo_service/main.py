"""
todo_service entry point.

Run migrations first (``alembic upgrade head``), then start with
``todo-service`` or ``python -m todo_service``.
"""

from logging import getLogger

from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from todo_service.api.router import api_router
from todo_service.config import settings
from todo_service.db.session import dispose_engine
from todo_service.logging_setup import setup_logging
from todo_service.middleware import install_request_handling
from todo_service.tracing import setup_opentelemetry, shutdown_opentelemetry

setup_logging(settings.log_level)

logger = getLogger(__name__)


app = FastAPI(title=settings.app_name, debug=settings.debug, redirect_slashes=False)

install_request_handling(app)

if settings.tracing_enabled:
    setup_opentelemetry()
    FastAPIInstrumentor.instrument_app(app)

app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    logger.info(
        f"--- {settings.service_name} starting on {settings.host}:{settings.port} ---"
    )


@app.on_event("shutdown")
async def shutdown_event():
    try:
        logger.info("--- Server shutting down! ---")

        await dispose_engine()

        shutdown_opentelemetry()
    except Exception as e:
        logger.error(f"Warning: Error during shutdown: {e}")


@app.get("/health")
def health_check():
    return {"status": "healthy"}


def run():
    import uvicorn

    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
