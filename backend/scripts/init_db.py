"""
Initialize the database: create all tables.
Run with: python -m scripts.init_db
"""

import asyncio
from socialcare.database import engine, init_models


async def init():
    print("Creating database tables...")
    await init_models()
    print("All tables created successfully.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init())
