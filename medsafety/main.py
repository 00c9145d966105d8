"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging
from . import __version__
from .config import settings
from .database import engine, SessionLocal
from .models import Base  # Import all models here for creating tables
from .exceptions import InfrastructureException, register_exception_handlers
from .core.middleware import setup_middlewares
from .interactions.seed import seed_default_interactions
from .medications.router import router as medications_router
from .interactions.router import router as interactions_router
from .administrations.router import router as administrations_router
from .compliance.router import router as compliance_router
from .alerts.router import router as alerts_router
from .symptoms.router import router as symptoms_router

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Create database tables if they don't exist
Base.metadata.create_all(bind=engine)

# Seed the interaction reference table
logger.info("Starting Medication Safety API...")
if settings.seed_interactions:
    db = SessionLocal()
    try:
        seed_default_interactions(db)
    except InfrastructureException as e:
        logger.error(f"Interaction seeding failed: {e.detail}")
    finally:
        db.close()

# Create FastAPI application
app = FastAPI(
    title="Medication Safety API",
    description="Prescriptions, dosing schedules, interaction checks, adherence and medication alerts",
    version=__version__
)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(medications_router, prefix="/api/v1/medications", tags=["Medications"])
app.include_router(interactions_router, prefix="/api/v1/interactions", tags=["Interactions"])
app.include_router(administrations_router, prefix="/api/v1/administrations", tags=["Administrations"])
app.include_router(compliance_router, prefix="/api/v1/compliance", tags=["Compliance"])
app.include_router(alerts_router, prefix="/api/v1/alerts", tags=["Alerts"])
app.include_router(symptoms_router, prefix="/api/v1/symptom-reports", tags=["Symptom Reports"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": "Welcome to the Medication Safety API", "version": __version__}

# Health check endpoint
@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information including database reachability
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {str(e)}")
        database = "unavailable"
    return {"status": "healthy" if database == "connected" else "degraded", "database": database}
