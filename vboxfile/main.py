"""
VBOX file service - FastAPI application.

Main application entry point and configuration.
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vboxfile.api.documents import router as documents_router


LOG_LEVEL_ENV = "VBOX_LOG_LEVEL"

# Configure logging
logging.basicConfig(
    level=os.getenv(LOG_LEVEL_ENV, "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="VBOX File Service",
    description="""
    Renders telemetry documents in the VBOX text file format.

    ## Features
    - Channel header with optional units
    - Optional free-text comment block
    - Fixed-width sample formatting (satellites, time, coordinates,
      velocity, heading, height)

    ## Usage
    POST a document to /documents/render and receive the file text.
    """,
    version="0.1.0",
)


# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(documents_router)


@app.get("/")
async def root():
    """Root endpoint - basic health check."""
    return {
        "name": "VBOX File Service",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
    }
