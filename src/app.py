"""
Employee Records API Server
Wires the store, routes, error handling and logging together at startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import ALLOWED_ORIGINS, LOG_LEVEL
from database.connection import init_database, close_database
from api.routes import employees, health
from services.employees_service import EmployeesService
from utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

def create_app(employees_service: Optional[EmployeesService] = None) -> FastAPI:
    """
    Build the FastAPI application.

    When ``employees_service`` is given it is used as-is and no database pool
    is opened; otherwise the lifespan opens the pool from settings and builds
    the service on top of it.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        if app.state.employees_service is not None:
            yield
            return

        db_pool = await init_database()
        app.state.db_pool = db_pool
        app.state.employees_service = EmployeesService(db_pool)
        try:
            yield
        finally:
            app.state.employees_service = None
            app.state.db_pool = None
            await close_database(db_pool)

    app = FastAPI(
        title="Employee Records Service",
        description="CRUD API for employee records",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.employees_service = employees_service
    app.state.db_pool = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(employees.router, tags=["Employees"])

    return app

# FastAPI app instance is exported for use by uvicorn
app = create_app()
