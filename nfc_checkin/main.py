# =======================================================================================
# nfc_checkin/main.py - FastAPI Application Entry Point
# =======================================================================================
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from .config import config
from .api.error_handlers import register_error_handlers
from .api.routes.employees import router as employees_router
from .api.routes.scan import router as scan_router
from .api.routes.dashboard import router as dashboard_router
from .database import DatabaseManager, db_manager
from .logging_setup import configure_logging
from .models.schemas import HealthResponse
from .services.access_ledger import AccessLedger
from .services.registry_store import RegistryStore
from .services.terminal import CheckinTerminal
from .workers.serial_worker import SerialWorker

logger = logging.getLogger("nfc_checkin.main")


def _start_serial_worker(db: DatabaseManager) -> Optional[SerialWorker]:
    registry = RegistryStore(db)
    worker = SerialWorker(CheckinTerminal(registry, AccessLedger(db, registry)))
    return worker if worker.start() else None


def create_app(db: Optional[DatabaseManager] = None, start_worker: bool = True) -> FastAPI:
    configure_logging()
    database = db or db_manager

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init_schema()
        worker = _start_serial_worker(database) if start_worker else None
        logger.info("NFC Check-in API started")
        yield
        if worker is not None:
            worker.stop()

    app = FastAPI(
        title="NFC Check-in API",
        version="1.0.0",
        description="Access-control lookup and audit log for NFC check-in terminals",
        debug=config.API_DEBUG,
        lifespan=lifespan,
    )
    app.state.db = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers
    app.include_router(employees_router, prefix="/api", tags=["employees"])
    app.include_router(scan_router, prefix="/api", tags=["scan"])
    app.include_router(dashboard_router, prefix="/api", tags=["dashboard"])

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health(request: Request):
        try:
            request.app.state.db.ping()
            return HealthResponse(status="ok", dataAvailable=True, message=None)
        except Exception as e:
            logger.warning("Health check failed: %s", e)
            return HealthResponse(status="error", dataAvailable=False, message=str(e))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
