# cuebook/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from cuebook.auth import ensure_admin
from cuebook.config import settings
from cuebook.db import engine, init_db
from cuebook.errors import register_error_handlers
from cuebook.routers import admin_routes, auth_routes, bookings_routes, calendars_routes

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    with Session(engine) as session:
        ensure_admin(session, settings.admin_username, settings.admin_password)
    logger.info("Booking API ready")
    yield


app = FastAPI(title="Cuebook", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_routes.router)
app.include_router(calendars_routes.router)
app.include_router(bookings_routes.router)
app.include_router(admin_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
