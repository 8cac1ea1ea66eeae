"""
Policy Studio Backend — FastAPI application entry point.

This module initializes the FastAPI application that lets a data
provider attach usage policies to catalog datasets and renders them as
IDS contract agreements and ODRL agreements. It configures CORS,
connects to MongoDB, and registers the dataset and policy routes.

Run locally with:
    $ uvicorn app.main:app --reload
"""

import os
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routes import datasets_routes, policies_routes
from app.db.client import close_mongo, init_mongo

load_dotenv()

# ------------------------------------------------------------------------------
# Application initialization
# ------------------------------------------------------------------------------

app = FastAPI(
    title="Policy Studio",
    description="API to generate IDS and ODRL usage policies for datasets",
    version="0.1.0"
)

# ------------------------------------------------------------------------------
# Middleware configuration
# ------------------------------------------------------------------------------

# Comma separated list; "*" allows any origin.
cors_origins = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------------------------
# Application lifecycle events
# ------------------------------------------------------------------------------

@app.on_event("startup")
async def startup_db():
    """
    Initialize the MongoDB client on application startup.
    """
    await init_mongo()


@app.on_event("shutdown")
async def shutdown_db():
    await close_mongo()

# ------------------------------------------------------------------------------
# API routes registration
# ------------------------------------------------------------------------------

app.include_router(datasets_routes.router, prefix="/datasets", tags=["Datasets"])
app.include_router(policies_routes.router, prefix="/policies", tags=["Policies"])
