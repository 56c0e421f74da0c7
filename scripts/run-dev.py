"""
FastAPI Development Server

Run the Waltz overlay diagram API in development mode.

Usage:
    python scripts/run-dev.py
    # OR, against a local SQLite file
    DB_URL=sqlite:///waltz.db python scripts/run-dev.py
"""

import os
from pathlib import Path

import uvicorn
from loguru import logger

from waltz.config.settings import DatabaseConfig
from waltz.infra import Database

project_root = Path(__file__).parent.parent
os.chdir(project_root)


def main():
    """Start the FastAPI development server"""
    logger.info("="*80)
    logger.info("Waltz - Overlay Diagram API Server")
    logger.info("="*80)
    logger.info("Server will be available at: http://localhost:8000")
    logger.info("API Documentation: http://localhost:8000/docs")
    logger.info("Health Check: http://localhost:8000/health")
    logger.info("Press CTRL+C to stop the server")
    logger.info("="*80)

    config = DatabaseConfig()
    if config.get_connection_string().startswith("sqlite"):
        Database(config).create_schema()

    uvicorn.run(
        "waltz.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
        access_log=True,
        reload_dirs=[str(project_root / "waltz")]
    )


if __name__ == "__main__":
    main()
