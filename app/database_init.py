"""
Startup initialization.

Creates the schema and, on a fresh database, a default Admin worker so
someone can sign in.
"""
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.security import get_password_hash
from app.database import init_db, async_session_factory
from app.models.worker import Worker, WorkerRole

logger = logging.getLogger(__name__)


async def seed_default_admin(session: AsyncSession) -> bool:
    """
    Create the bootstrap Admin when the workers table is empty.

    Returns:
        True if an admin was created
    """
    worker_count = await session.scalar(select(func.count()).select_from(Worker)) or 0
    if worker_count > 0:
        logger.info(f"Found {worker_count} existing workers. Skipping admin seed.")
        return False

    admin = Worker(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password_hash=get_password_hash(settings.ADMIN_PASSWORD),
        full_name="System Administrator",
        role=WorkerRole.ADMIN.value,
        department="Administration",
        is_active=True,
    )
    session.add(admin)
    await session.commit()

    logger.info(f"Created default admin worker '{settings.ADMIN_USERNAME}'")
    return True


async def startup_initialization():
    """
    Main startup initialization.

    Steps:
    1. Create tables
    2. Seed the default admin (if enabled)
    """
    logger.info("=== Startup initialization ===")

    await init_db()

    if settings.SEED_ADMIN_ON_STARTUP:
        async with async_session_factory() as session:
            await seed_default_admin(session)

    logger.info("=== Startup initialization complete ===")
