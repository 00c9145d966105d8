"""
Database connection and session management.
Provides SQLAlchemy engine, session, and base class for models.
"""
import logging
import uuid
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from .config import settings
from .exceptions import InfrastructureException

# Set up logging
logger = logging.getLogger(__name__)


def _connect_args(database_url: str) -> dict:
    """
    Build driver connection arguments that bound every persistence call.

    Args:
        database_url: SQLAlchemy connection string

    Returns:
        dict: Keyword arguments passed to the DBAPI connect call
    """
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": settings.db_timeout_seconds}
    if database_url.startswith("postgresql"):
        return {
            "connect_timeout": settings.db_timeout_seconds,
            "options": f"-c statement_timeout={settings.db_timeout_seconds * 1000}",
        }
    return {}


# Create SQLAlchemy engine for database connection
engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,
)

# Create session factory for database sessions
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

# Create base class for declarative models
Base = declarative_base()

def generate_uuid() -> str:
    """Primary key default for every engine table."""
    return str(uuid.uuid4())

def get_db():
    """
    Database dependency - Creates and yields a database session.

    The session is automatically closed after the request is processed,
    even if an exception occurs during request handling.

    Yields:
        SQLAlchemy Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, action: str) -> None:
    """
    Commit the current unit of work or roll it back.

    Args:
        db: Database session
        action: Short description used in the log line and error detail

    Raises:
        InfrastructureException: If the database rejects or times out the commit
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error while {action}: {str(e)}")
        raise InfrastructureException(f"A storage error occurred while {action}") from e
