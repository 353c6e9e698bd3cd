"""Application lifecycle event handlers for Mindify.

This module manages startup and shutdown: the MongoDB connection, index
creation and the chat completion client. Both long-lived clients are kept
on ``app.state`` and handed to routes through dependencies.
"""

from typing import Callable, List, Tuple

from fastapi import FastAPI
from pymongo import ASCENDING, DESCENDING

from mindify.core.config import Settings
from mindify.database.mongodb import MongoDB
from mindify.llm.openrouter_llm import OpenRouterLLM
from mindify.utils.constants import Collections
from mindify.utils.logger import get_logger

logger = get_logger(__name__)

CRITICAL_STARTUP_TASKS = ("Database Connection",)

# (collection, keys, options)
INDEXES: List[Tuple[str, List[Tuple[str, int]], dict]] = [
    (Collections.POSTS.value, [("timestamp", DESCENDING)], {}),
    (Collections.TEST_RESULTS.value, [("testId", ASCENDING)], {}),
    (Collections.TEST_RESULTS.value, [("anonymousId", ASCENDING)], {}),
]


class StartupEvent:
    """Handles application startup tasks."""

    def __init__(self, app: FastAPI, settings: Settings):
        """Initialize startup event handler.

        Args:
            app: FastAPI application instance
            settings: Application settings
        """
        self.app = app
        self.settings = settings
        self.tasks: List[str] = []
        self.failed_tasks: List[Tuple[str, str]] = []

    async def execute(self) -> None:
        """Execute all startup tasks."""
        logger.info(
            "Starting application startup sequence",
            extra={
                "app_name": self.settings.APP_NAME,
                "version": self.settings.APP_VERSION,
                "environment": self.settings.APP_ENV,
            }
        )

        startup_tasks = [
            ("Database Connection", self._connect_database),
            ("Database Indexes", self._create_indexes),
            ("Chat Client", self._create_chat_client),
        ]

        for task_name, task_func in startup_tasks:
            try:
                logger.info(f"Starting: {task_name}")
                await task_func()
                self.tasks.append(task_name)
                logger.info(f"Completed: {task_name}")
            except Exception as e:
                logger.error(
                    f"Failed: {task_name}",
                    extra={"error": str(e)},
                    exc_info=True
                )
                self.failed_tasks.append((task_name, str(e)))

                if task_name in CRITICAL_STARTUP_TASKS:
                    raise RuntimeError(
                        f"Critical startup task failed: {task_name}. Error: {str(e)}"
                    ) from e

        self._log_startup_summary()

    async def _connect_database(self) -> None:
        mongodb = MongoDB(
            url=self.settings.MONGO_URI,
            db_name=self.settings.MONGODB_DB_NAME,
            max_pool_size=self.settings.MONGODB_MAX_POOL_SIZE,
            min_pool_size=self.settings.MONGODB_MIN_POOL_SIZE,
            connect_timeout_ms=self.settings.MONGODB_CONNECT_TIMEOUT_MS,
            server_selection_timeout_ms=self.settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )
        await mongodb.connect()
        self.app.state.mongodb = mongodb

    async def _create_indexes(self) -> None:
        """Create database indexes. Failures are logged, not raised."""
        mongodb: MongoDB = self.app.state.mongodb

        created_count = 0
        for collection_name, keys, options in INDEXES:
            if await mongodb.create_index(collection_name, keys, **options):
                created_count += 1

        logger.info(f"Created {created_count} database indexes")

    async def _create_chat_client(self) -> None:
        if not self.settings.OPENROUTER_API_KEY:
            logger.warning("OPENROUTER_API_KEY is not set, chat requests will be rejected upstream")

        self.app.state.llm = OpenRouterLLM.from_config(self.settings.get_llm_config())

    def _log_startup_summary(self) -> None:
        summary = {
            "successful_tasks": len(self.tasks),
            "failed_tasks": len(self.failed_tasks),
            "tasks": self.tasks,
            "failures": self.failed_tasks,
            "environment": self.settings.APP_ENV,
            "debug_mode": self.settings.APP_DEBUG,
            "api_docs": self.settings.ENABLE_API_DOCS,
            "metrics": self.settings.ENABLE_METRICS,
        }

        if self.failed_tasks:
            logger.warning("Application started with errors", extra=summary)
        else:
            logger.info("Application started successfully", extra=summary)


class ShutdownEvent:
    """Handles application shutdown tasks."""

    def __init__(self, app: FastAPI):
        """Initialize shutdown event handler.

        Args:
            app: FastAPI application instance
        """
        self.app = app

    async def execute(self) -> None:
        """Execute all shutdown tasks."""
        logger.info("Starting application shutdown sequence")

        shutdown_tasks = [
            ("Close Chat Client", self._close_chat_client),
            ("Close Database Connection", self._close_database),
        ]

        for task_name, task_func in shutdown_tasks:
            try:
                logger.info(f"Executing: {task_name}")
                await task_func()
                logger.info(f"Completed: {task_name}")
            except Exception as e:
                logger.error(
                    f"Error during {task_name}: {str(e)}",
                    exc_info=True
                )

        logger.info("Application shutdown sequence completed")

    async def _close_chat_client(self) -> None:
        llm = getattr(self.app.state, "llm", None)
        if llm is not None:
            await llm.aclose()
            self.app.state.llm = None

    async def _close_database(self) -> None:
        mongodb = getattr(self.app.state, "mongodb", None)
        if mongodb is not None:
            await mongodb.disconnect()
            self.app.state.mongodb = None


def create_start_app_handler(app: FastAPI, settings: Settings) -> Callable:
    """Create startup event handler for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Startup event handler function
    """
    async def start_app() -> None:
        startup_event = StartupEvent(app, settings)
        await startup_event.execute()

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler for the application.

    Args:
        app: FastAPI application instance

    Returns:
        Shutdown event handler function
    """
    async def stop_app() -> None:
        shutdown_event = ShutdownEvent(app)
        await shutdown_event.execute()

    return stop_app


__all__ = [
    "INDEXES",
    "ShutdownEvent",
    "StartupEvent",
    "create_start_app_handler",
    "create_stop_app_handler",
]
