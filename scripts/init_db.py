"""Initialize database tables and the default admin worker."""
import asyncio

from app.database_init import startup_initialization


async def init():
    """Create all tables."""
    print("Creating database tables...")
    await startup_initialization()
    print("Database tables created successfully!")


if __name__ == "__main__":
    asyncio.run(init())
