"""
Recruiting Platform - Main Application

FastAPI backend with:
- MongoDB for companies, jobs and applications
- JWT authentication (tokens issued by the identity provider)
- HATEOAS links on company responses

Run: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import ResponseValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.api.errors import response_validation_handler
from app.db.mongodb import init_mongo_indexes, test_mongo_connection
from app.core.config import get_settings
from app.core.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.log_level, settings.log_file)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)
    yield


# Create FastAPI app
app = FastAPI(
    title="Recruiting Platform",
    description="""
    Recruiting backend over a document database.

    ## Features
    - **Applications**: Create, filter, sort, update and delete applications
    - **Companies**: One company per user, with hypermedia links
    - **Jobs**: Created and deleted through their company, which keeps a list of its job ids
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ResponseValidationError, response_validation_handler)

# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", tags=["Health"])
async def root():
    """Basic liveness check."""
    return {"status": "healthy", "app": "Recruiting Platform", "message": "API is running."}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
