"""
Database setup and configuration using SQLAlchemy
Stores material catalogs so projects can carry their own transmission data
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from contextlib import contextmanager

from ..calculations.debug_logger import debug_logger

COMPONENT = "Database"
MEMORY_URL = "sqlite:///:memory:"

# Create base class for declarative models
Base = declarative_base()

# Global session factory
SessionLocal = None
engine = None


def _database_url(db_path):
	"""SQLite URL for a file path; full URLs pass through unchanged"""
	if db_path == ":memory:":
		return MEMORY_URL
	if "://" in db_path:
		return db_path
	return f"sqlite:///{db_path}"


def initialize_database(db_path=None):
	"""Initialize the database connection and create tables

	Args:
		db_path: SQLite file path, ":memory:" or a SQLAlchemy URL. Defaults to
			the configured FACADE_ACOUSTICS_DATABASE_PATH, else an in-memory store.

	Returns:
		The database URL in use
	"""
	global engine, SessionLocal

	if db_path is None:
		from ..utils.settings_manager import get_settings_manager
		db_path = get_settings_manager().get_database_path() or ":memory:"

	url = _database_url(db_path)
	if url.startswith("sqlite:///") and url != MEMORY_URL:
		directory = os.path.dirname(url[len("sqlite:///"):])
		if directory:
			os.makedirs(directory, exist_ok=True)

	# If engine already exists and is using the same URL, don't reinitialize
	if engine is not None:
		if str(engine.url) == url and url != MEMORY_URL:
			debug_logger.debug(COMPONENT, "Database already initialized", {'url': url})
			return url
		engine.dispose()

	debug_logger.info(COMPONENT, "Initializing database", {'url': url})
	engine = create_engine(url, echo=False)

	# Enable foreign key constraints for SQLite
	@event.listens_for(engine, "connect")
	def set_sqlite_pragma(dbapi_connection, connection_record):
		cursor = dbapi_connection.cursor()
		cursor.execute("PRAGMA foreign_keys=ON")
		cursor.close()

	# expire_on_commit=False keeps loaded catalog rows readable after the session closes
	SessionLocal = sessionmaker(
		autocommit=False,
		autoflush=False,
		expire_on_commit=False,
		bind=engine,
	)

	# Import all models to ensure they're registered
	from . import acoustic_material  # noqa: F401

	Base.metadata.create_all(bind=engine)
	return url


def get_session():
	"""Get a new database session"""
	if SessionLocal is None:
		raise RuntimeError("Database not initialized. Call initialize_database() first.")
	return SessionLocal()


@contextmanager
def session_scope():
	"""Context manager committing on success and rolling back on error

	Usage:
		with session_scope() as session:
			save_catalog_to_database(session, catalog)
	"""
	session = get_session()
	try:
		yield session
		session.commit()
	except Exception as e:
		session.rollback()
		debug_logger.error(COMPONENT, "Session rolled back", error=e)
		raise
	finally:
		session.close()


def close_database():
	"""Close the database connection"""
	global engine, SessionLocal
	if engine:
		engine.dispose()
		engine = None
	SessionLocal = None
