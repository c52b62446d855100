# app/main.py
import os
from dotenv import load_dotenv

# Load .env BEFORE anything reads the environment (engine URL, credentials)
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import health
from .api.customers import main as customers_main_api
from .api.notifications import main as notifications_main_api
from .api.service_types import main as service_types_main_api
from .api.settings import main as settings_main_api
from .api.stats import main as stats_main_api
from .db.init_db import setup_databases


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables and seed defaults on startup."""
    setup_databases()
    yield


app = FastAPI(title="Service Reminder Tracker", version="0.1.0", lifespan=lifespan)


# ============================================================================
# --- CORS ---
# ============================================================================
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "http://localhost:8000")
origins = allowed_origins_env.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# --- GLOBAL EXCEPTION HANDLER ---
# ============================================================================
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# ============================================================================
# --- ROUTERS INCLUSION ---
# ============================================================================
app.include_router(health.router)
app.include_router(customers_main_api.router, prefix="/api", tags=["Customers"])
app.include_router(service_types_main_api.router, prefix="/api", tags=["Service Types"])
app.include_router(notifications_main_api.router, prefix="/api", tags=["Notifications"])
app.include_router(stats_main_api.router, prefix="/api", tags=["Stats"])
app.include_router(settings_main_api.router, prefix="/api", tags=["Settings"])
