"""
Pre-start script to check database connectivity and other services.
"""

# Standard library imports
import asyncio
import sys

# Local application imports
from consulta.core.caching.redis import create_redis_client
from consulta.core.db import Database
from consulta.core.monitoring import get_logger
from consulta.settings import settings

logger = get_logger(__name__)


async def check_database() -> bool:
    """Check if database is accessible and ready."""
    database = Database(settings.SQLALCHEMY_ASYNC_DATABASE_URI)
    try:
        await database.ping()
        logger.info("✅ Database is ready!")
        return True

    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False
    finally:
        await database.dispose()


async def check_redis() -> bool:
    """Check if Redis answers a PING."""
    client = create_redis_client()
    try:
        await client.ping()
        logger.info("✅ Redis is ready!")
        return True

    except Exception as e:
        logger.error(f"❌ Redis connection failed: {e}")
        return False
    finally:
        await client.aclose()


async def wait_for_database(max_retries: int = 30, retry_interval: int = 2) -> bool:
    """
    Wait for database to be ready.

    Args:
        max_retries: Maximum number of connection attempts
        retry_interval: Seconds between retries

    Returns:
        True if database is ready, False otherwise
    """
    logger.info("Waiting for database to be ready...")

    for attempt in range(1, max_retries + 1):
        logger.info(f"Database connection attempt {attempt}/{max_retries}")

        if await check_database():
            return True

        if attempt < max_retries:
            logger.info(f"Retrying in {retry_interval} seconds...")
            await asyncio.sleep(retry_interval)

    logger.error(f"Failed to connect to database after {max_retries} attempts")
    return False


async def main() -> None:
    """Main pre-start routine."""
    logger.info("Starting pre-start checks...")

    # Check database
    if not await wait_for_database():
        logger.error("Pre-start checks failed: Database is not available")
        sys.exit(1)

    # Rate limiting depends on Redis
    if not await check_redis():
        logger.error("Pre-start checks failed: Redis is not available")
        sys.exit(1)

    logger.info("✅ All pre-start checks passed!")


if __name__ == "__main__":
    asyncio.run(main())
