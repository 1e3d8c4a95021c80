"""
Migration Engine
================
Main orchestrator that wires configuration, the Notion client and the
migration components together.

Usage:
    engine = MigrationEngine(load_config())
    report = engine.run()

Architecture:
    Source page → BlockFetcher → QuestionExtractor → QuizQuestion →
    DestinationWriter → destination database row
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Optional

from notion_client import Client

from .block_fetcher import BlockFetcher
from .config import MigrationConfig
from .extractor import QuestionExtractor
from .models import MigrationReport
from .writer import DestinationWriter

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_HANDLER = "quiz_migrator.console"


def build_client(config: MigrationConfig) -> Client:
    """Create the Notion SDK client described by the config."""
    return Client(
        auth=config.notion_key,
        base_url=config.api_base_url,
        notion_version=config.notion_version,
        timeout_ms=int(config.request_timeout * 1000),
    )


class MigrationEngine:
    """
    Runs one migration from the source page to the destination database.

    The client is created from the config unless one is passed in.
    """

    def __init__(
        self,
        config: MigrationConfig,
        client: Optional[Client] = None,
    ):
        self.config = config
        self._setup_logging()

        self.client = client or build_client(config)
        self.fetcher = BlockFetcher(self.client, page_size=config.page_size)
        self.writer = DestinationWriter(
            self.client,
            database_id=config.dest_database_id,
            time_in_seconds=config.time_in_seconds,
            question_type=config.question_type,
            dry_run=config.dry_run,
        )
        self.extractor = QuestionExtractor(
            self.fetcher,
            self.writer,
            image_link_message=config.image_link_message,
            correct_option_color=config.correct_option_color,
            max_workers=config.max_workers,
        )

    def _setup_logging(self):
        """Configure logging based on config. Handlers are attached once."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        package_logger = logging.getLogger("quiz_migrator")
        package_logger.setLevel(log_level)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        # Console handler
        console = next(
            (h for h in package_logger.handlers if h.get_name() == CONSOLE_HANDLER),
            None,
        )
        if console is None:
            console = logging.StreamHandler()
            console.set_name(CONSOLE_HANDLER)
            console.setFormatter(formatter)
            package_logger.addHandler(console)
        console.setLevel(log_level)

        # File handler, one per log file
        if self.config.log_file:
            log_path = Path(self.config.log_file).resolve()
            file_handler = next(
                (
                    h for h in package_logger.handlers
                    if isinstance(h, logging.FileHandler)
                    and Path(h.baseFilename).resolve() == log_path
                ),
                None,
            )
            if file_handler is None:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path, encoding="utf-8")
                file_handler.setFormatter(formatter)
                package_logger.addHandler(file_handler)
            file_handler.setLevel(log_level)

    def run(self) -> MigrationReport:
        """
        Migrate every question on the source page.

        Raises:
            MissingOptionsError: A question on the source page has no options.
            APIResponseError: Reading the source page failed.
        """
        start_time = time.time()
        logger.info(
            f"Migrating quiz questions from page {self.config.source_page_id} "
            f"to database {self.config.dest_database_id}"
            + (" (dry run)" if self.config.dry_run else "")
        )

        report = self.extractor.process(self.config.source_page_id)
        report.dest_database_id = self.config.dest_database_id
        report.dry_run = self.config.dry_run
        report.elapsed_seconds = round(time.time() - start_time, 2)

        logger.info(
            f"Migration complete in {report.elapsed_seconds:.2f}s: "
            f"{report.rows_written} written, {report.rows_failed} failed"
        )
        return report

    def describe_destination(self) -> dict[str, Any]:
        """Return the destination database object, including its schema."""
        return self.client.databases.retrieve(
            database_id=self.config.dest_database_id
        )
