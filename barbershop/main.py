# barbershop/main.py

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from barbershop.config import get_settings
from barbershop.db import create_db_and_tables
from barbershop.errors import BookingError, SchedulingConflictError
from barbershop.routers import (
    appointments_routes,
    auth_routes,
    clients_routes,
    dashboard_routes,
    reports_routes,
    services_routes,
)

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting barbershop API")
    create_db_and_tables()
    yield
    logger.info("Barbershop API stopped")


app = FastAPI(title="Barbershop API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchedulingConflictError)
async def scheduling_conflict_handler(request: Request, exc: SchedulingConflictError):
    content = {"detail": exc.detail}
    if exc.result is not None:
        content["conflict"] = jsonable_encoder(exc.result.to_dict())
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(auth_routes.router)
app.include_router(appointments_routes.router)
app.include_router(services_routes.router)
app.include_router(clients_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(reports_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
