import asyncio
import sys
import os

# Add the current directory to sys.path
sys.path.append(os.getcwd())

from core.database import create_tables, engine

async def init_db():
    print("Initializing database tables...")
    await create_tables()
    await engine.dispose()
    print("Database tables initialized successfully.")

if __name__ == "__main__":
    asyncio.run(init_db())
