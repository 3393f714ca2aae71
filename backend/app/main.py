# emoti backend api
# fastapi app with async mongodb, jwt auth, the mood aggregation dashboard and journal

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.services.db import db
from app.routers import auth, journals, mood

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: connect to mongodb. shutdown: close connection."""
    logger.info("Starting EMOTI backend...")
    await db.connect()
    logger.info("EMOTI backend ready")
    yield
    logger.info("Shutting down EMOTI backend...")
    await db.close()


app = FastAPI(
    title="EMOTI API",
    description="Backend API for EMOTI — mood event logging, weekly mood dashboards and a journal",
    version="0.1.0",
    lifespan=lifespan,
)

# cors — allow the vite frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(mood.router)
app.include_router(journals.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "emoti-api"}
