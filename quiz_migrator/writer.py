"""
Destination Writer
==================
Maps a QuizQuestion onto the destination database columns and creates the
row. A failed write is logged and reported, never raised, so one bad row
does not stop the batch.

Only MAX_OPTIONS options fit the destination. Extra options are dropped with
a warning; a question whose correct answer is among the dropped options is
not written at all.
"""

from __future__ import annotations

import json
import logging

from notion_client import Client

from .models import MAX_OPTIONS, QuestionRow, QuizQuestion

logger = logging.getLogger(__name__)


class DestinationWriter:
    """Creates one destination row per question."""

    def __init__(
        self,
        client: Client,
        database_id: str,
        time_in_seconds: int,
        question_type: str = "Multiple Choice",
        dry_run: bool = False,
    ):
        self.client = client
        self.database_id = database_id
        self.time_in_seconds = time_in_seconds
        self.question_type = question_type
        self.dry_run = dry_run

    def build_row(self, question: QuizQuestion) -> QuestionRow:
        """
        Raises:
            ValidationError: The correct answer was one of the dropped options.
        """
        if len(question.options) > MAX_OPTIONS:
            logger.warning(
                f"Question {question.question_number} has "
                f"{len(question.options)} options; only the first "
                f"{MAX_OPTIONS} fit the destination. Dropped: "
                f"{question.options[MAX_OPTIONS:]}"
            )
        return QuestionRow.from_question(
            question,
            time_in_seconds=self.time_in_seconds,
            question_type=self.question_type,
        )

    def write_question(self, question: QuizQuestion) -> bool:
        """
        Add the question to the destination database.

        Returns:
            True if the row was created (or rendered in dry-run mode),
            False if it could not be built or the store rejected it.
        """
        try:
            row = self.build_row(question)
            properties = row.to_properties()

            if self.dry_run:
                logger.info(
                    f"[dry-run] Question {question.question_number}: "
                    f"{json.dumps(properties, ensure_ascii=False)}"
                )
                return True

            self.client.pages.create(
                parent={"database_id": self.database_id},
                properties=properties,
            )
        except Exception as e:
            logger.error(
                f"Question {question.question_number} could not be added "
                f"to the destination database."
            )
            logger.error(f"Error: {getattr(e, 'body', None) or e}")
            return False

        logger.info(
            f"Question {question.question_number} successfully added "
            f"to the destination database."
        )
        return True
