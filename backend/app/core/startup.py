"""
Application startup tasks.

Handles initialization tasks that should run when the application starts:
- Mall dataset loading
- Session store connectivity check
"""
import logging

from app.core.datastore import get_repository
from app.services.session_service import session_store

logger = logging.getLogger(__name__)


def load_mall_data() -> None:
    """
    Load the mall dataset into memory.

    A missing or corrupt data file is not fatal: the repository falls back
    to its built-in dataset.
    """
    repository = get_repository()
    malls = repository.load()
    store_count = sum(len(mall.stores) for mall in malls)

    if repository.using_default_dataset:
        logger.warning(f"⚠️  Serving default dataset ({len(malls)} malls, {store_count} stores)")
    else:
        logger.info(f"✅ Loaded {len(malls)} malls with {store_count} stores")


def check_session_store() -> None:
    """
    Verify Redis connectivity for sessions.

    The API still starts without Redis; logins fail until it is reachable.
    """
    if session_store.health_check():
        logger.info("✅ Session store reachable")
    else:
        logger.warning("⚠️  Application starting without session store connectivity")


def run_startup_tasks() -> None:
    """
    Run all startup tasks.

    This function is called when the FastAPI application starts.
    """
    logger.info("=" * 60)
    logger.info("Running application startup tasks...")
    logger.info("=" * 60)

    load_mall_data()
    check_session_store()

    logger.info("=" * 60)
    logger.info("✅ Startup tasks completed")
    logger.info("=" * 60)
