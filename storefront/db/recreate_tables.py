import logging

from storefront.db.init_db import Database, init_db

logger = logging.getLogger(__name__)


async def recreate_tables(database: Database) -> None:
    """Drop and recreate all tables in the database."""
    try:
        await database.drop_all()
        logger.info("All tables dropped successfully")

        await init_db(database)
        logger.info("All tables created successfully")
    except Exception as e:
        logger.error(f"Error recreating tables: {e}")
        raise
