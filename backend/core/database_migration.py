"""
Database migration automation
Applies pending Alembic revisions safely before application startup
"""

import asyncio
from typing import List, Dict, Any, Optional
from pathlib import Path
import structlog
from sqlalchemy import text
from alembic.config import Config
from alembic import command
from alembic.script import ScriptDirectory

from core.database import validate_database_connection, engine, create_tables
from core.config import settings

logger = structlog.get_logger()

REQUIRED_TABLES = [
    "users", "clients", "cases", "case_sessions", "invoices", "payments",
    "calendar_events", "tasks", "documents", "notifications",
]

class DatabaseMigrationManager:
    """Manages database migrations with safety checks"""

    def __init__(self, alembic_ini_path: Optional[Path] = None):
        self.logger = logger.bind(service="database_migration")
        self.alembic_cfg = None
        self._setup_alembic_config(alembic_ini_path or Path(__file__).parent.parent / "alembic.ini")

    def _setup_alembic_config(self, alembic_ini_path: Path):
        """Load alembic.ini next to the backend package, if present"""
        if not alembic_ini_path.exists():
            self.logger.warning("Alembic configuration not found, falling back to create_all")
            return

        self.alembic_cfg = Config(str(alembic_ini_path))
        self.alembic_cfg.set_main_option("script_location", str(alembic_ini_path.parent / "alembic"))
        self.alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
        self.logger.info("Alembic configuration loaded", config_path=str(alembic_ini_path))

    async def get_current_schema_version(self) -> Optional[str]:
        """
        Get the current database schema version

        Returns:
            Optional[str]: Current revision or None if the database is not versioned
        """
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text("""
                    SELECT EXISTS (
                        SELECT FROM information_schema.tables
                        WHERE table_schema = 'public'
                        AND table_name = 'alembic_version'
                    )
                """))
                if not result.scalar():
                    return None

                version_result = await conn.execute(text("SELECT version_num FROM alembic_version"))
                row = version_result.fetchone()
                return row[0] if row else None

        except Exception as e:
            self.logger.error("Failed to get current schema version", error=str(e))
            return None

    async def get_pending_migrations(self) -> List[str]:
        """Revision ids between the current version and head, oldest first"""
        if not self.alembic_cfg:
            return []

        script = ScriptDirectory.from_config(self.alembic_cfg)
        current_version = await self.get_current_schema_version()
        revisions = list(reversed(list(script.walk_revisions())))

        if current_version is None:
            return [rev.revision for rev in revisions]

        pending = []
        found_current = False
        for rev in revisions:
            if rev.revision == current_version:
                found_current = True
                continue
            if found_current:
                pending.append(rev.revision)
        return pending

    async def run_migrations(self, target_revision: str = "head") -> Dict[str, Any]:
        """
        Upgrade the database to ``target_revision``

        Alembic's async env.py drives its own event loop, so the upgrade runs
        in a worker thread.
        """
        if not self.alembic_cfg:
            return {"status": "error", "message": "Alembic configuration not available", "migrations_applied": []}

        try:
            pending_migrations = await self.get_pending_migrations()
            if not pending_migrations:
                return {"status": "success", "message": "No pending migrations to apply", "migrations_applied": []}

            self.logger.info("Starting database migrations",
                             pending_count=len(pending_migrations),
                             target_revision=target_revision)

            await asyncio.to_thread(command.upgrade, self.alembic_cfg, target_revision)
            new_version = await self.get_current_schema_version()

            self.logger.info("Database migrations completed successfully",
                             new_version=new_version,
                             migrations_applied=pending_migrations)
            return {
                "status": "success",
                "message": f"Successfully applied {len(pending_migrations)} migrations",
                "migrations_applied": pending_migrations,
                "new_version": new_version,
            }

        except Exception as e:
            self.logger.error("Database migration failed", error=str(e))
            return {"status": "error", "message": f"Migration failed: {str(e)}", "migrations_applied": []}

    async def validate_schema_integrity(self) -> Dict[str, Any]:
        """Report which of the application tables exist"""
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text("""
                    SELECT table_name FROM information_schema.tables
                    WHERE table_schema = 'public'
                """))
                existing = {row[0] for row in result.fetchall()}

            missing_tables = [table for table in REQUIRED_TABLES if table not in existing]
            return {
                "status": "incomplete" if missing_tables else "valid",
                "existing_tables": [table for table in REQUIRED_TABLES if table in existing],
                "missing_tables": missing_tables,
            }

        except Exception as e:
            self.logger.error("Schema integrity validation failed", error=str(e))
            return {"status": "error", "message": f"Validation failed: {str(e)}"}

    async def safe_migration_startup(self) -> Dict[str, Any]:
        """
        Bring the schema up to date during application startup

        Returns:
            Dict[str, Any]: Startup migration result
        """
        self.logger.info("Starting safe database migration for application startup")

        if not await validate_database_connection():
            return {"status": "error", "message": "Database is not accessible", "step": "connectivity_check"}

        if not self.alembic_cfg:
            if not settings.AUTO_CREATE_TABLES:
                return {"status": "skipped", "message": "Alembic not configured and table creation disabled"}
            try:
                await create_tables()
            except Exception as e:
                self.logger.error("Failed to create tables", error=str(e))
                return {"status": "error", "message": f"Table creation failed: {str(e)}"}
            return {"status": "success", "message": "Tables created from model metadata"}

        migration_result = await self.run_migrations()
        if migration_result["status"] != "success":
            return {"status": "error", "message": "Migration failed during startup", "migration_result": migration_result}

        return {
            "status": "success",
            "message": migration_result["message"],
            "migration_result": migration_result,
            "schema_validation": await self.validate_schema_integrity(),
        }

# Global migration manager instance
migration_manager = DatabaseMigrationManager()

async def run_startup_migrations() -> bool:
    """
    Run database migrations during application startup

    Returns:
        bool: True if the schema is ready
    """
    result = await migration_manager.safe_migration_startup()
    return result["status"] == "success"

async def get_migration_status() -> Dict[str, Any]:
    """Current revision, pending count and schema status for readiness checks"""
    try:
        current_version = await migration_manager.get_current_schema_version()
        pending = await migration_manager.get_pending_migrations()
        schema = await migration_manager.validate_schema_integrity()
        return {
            "current_version": current_version,
            "pending_count": len(pending),
            "schema_status": schema.get("status", "unknown"),
        }
    except Exception as e:
        logger.error("Failed to get migration status", error=str(e))
        return {"current_version": None, "pending_count": 0, "schema_status": "unknown", "error": str(e)}
