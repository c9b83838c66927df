"""
Main FastAPI application entry point.
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api import clients, shipments
from app.db.database import engine, Base, settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="CLEX Customs Import Service",
    description="Import shipment, client and document tracking for customs brokerage",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(shipments.router, prefix="/api/shipments", tags=["shipments"])
app.include_router(clients.router, prefix="/api/clients", tags=["clients"])


@app.get("/")
async def root():
    return {"message": "CLEX Customs Import Service API"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
