from tortoise import Tortoise
from foodhub.core.config import DB_URL
import logging
from logging import INFO

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(INFO)
log = logging.getLogger("foodhub.db")

# Define all models modules for the ORM
MODELS_MODULES = [
    "foodhub.models.user",
    "foodhub.models.restaurant",
    "foodhub.models.order",
]

async def init_db(db_url: str = DB_URL, generate_schemas: bool = True):
    """
    Initializes the Tortoise ORM connection and (by default) creates missing
    tables. Tests pass their own SQLite url.
    """
    try:
        await Tortoise.init(
            db_url=db_url,
            modules={"models": MODELS_MODULES},
        )
        if generate_schemas:
            await Tortoise.generate_schemas(safe=True)
        log.info("Database connection established.")
    except Exception:
        log.critical(f"Could not connect to database at {db_url}.", exc_info=True)
        # Re-raise to prevent the application from starting without a database
        raise

async def close_db():
    """Closes all database connections."""
    await Tortoise.close_connections()
    log.info("Database connections closed.")
