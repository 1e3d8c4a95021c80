"""
Question Extractor
==================
Walks the top-level blocks of the source page and turns every numbered
list item into a QuizQuestion:

    1. Question  →  numbered list item on the page
         1. Option  →  nested numbered list item (green background = correct)
         [image]    →  nested image, marks the question as having an image

Each question is built and written on a bounded worker pool. All tasks are
joined before the run summary is produced.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from .block_fetcher import BlockFetcher
from .errors import MissingOptionsError
from .models import BlockContent, BlockType, MigrationReport, QuizQuestion
from .writer import DestinationWriter

logger = logging.getLogger(__name__)


class QuestionExtractor:
    """
    Detects question blocks, builds QuizQuestions from their children and
    hands each one to the DestinationWriter.

    The block counter advances for every top-level block, so a question's
    number is its position among all blocks on the page.
    """

    def __init__(
        self,
        fetcher: BlockFetcher,
        writer: DestinationWriter,
        image_link_message: str,
        correct_option_color: str = "green_background",
        max_workers: int = 4,
    ):
        self.fetcher = fetcher
        self.writer = writer
        self.image_link_message = image_link_message
        self.correct_option_color = correct_option_color
        self.max_workers = max_workers

    def extract_and_dispatch(self, source_block_id: str) -> int:
        """Migrate every question under `source_block_id`; return the count."""
        return self.process(source_block_id).questions_detected

    def process(self, source_block_id: str) -> MigrationReport:
        """
        Walk the source block's children and migrate every question.

        Raises:
            MissingOptionsError: A question block has no children. Blocks
                after it are not processed.
        """
        report = MigrationReport(source_page_id=source_block_id)
        children = self.fetcher.fetch_all_children(source_block_id)
        pending: list[tuple[int, Future]] = []

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="quiz-question",
        ) as pool:
            for block_number, child in enumerate(children, start=1):
                report.blocks_seen = block_number
                logger.info(f"{block_number} {child.type}")

                if not child.is_type(BlockType.NUMBERED_LIST_ITEM):
                    continue

                # Options must be nested under the question
                if not child.has_children:
                    raise MissingOptionsError(block_number, child.text)

                report.questions_detected += 1
                pending.append((
                    block_number,
                    pool.submit(
                        self._build_and_write,
                        block_number,
                        child.id,
                        child.content,
                    ),
                ))

        for question_number, future in pending:
            if future.result():
                report.rows_written += 1
            else:
                report.rows_failed += 1
                report.failed_question_numbers.append(question_number)

        logger.info(
            f"Total number of quiz questions: {report.questions_detected}"
        )
        return report

    def build_question(
        self,
        question_number: int,
        block_id: str,
        block_content: BlockContent,
    ) -> QuizQuestion:
        """
        Build a QuizQuestion from a question block and its nested blocks.

        Args:
            question_number: Position of the block on the source page.
            block_id: ID of the question block.
            block_content: Payload of the question block.
        """
        options: list[str] = []
        correct_answer: Optional[int] = None
        image_link: Optional[str] = None

        for child in self.fetcher.fetch_all_children(block_id):
            if child.is_type(BlockType.NUMBERED_LIST_ITEM):
                option = child.content
                options.append(option.first_text)
                if option.color == self.correct_option_color:
                    correct_answer = len(options)
            elif child.is_type(BlockType.IMAGE):
                image_link = self.image_link_message

        question = QuizQuestion(
            question_number=question_number,
            question_text=block_content.first_text,
            options=options,
            correct_answer=correct_answer,
            image_link=image_link,
        )
        logger.debug(f"Built {question!r}")
        return question

    def _build_and_write(
        self,
        question_number: int,
        block_id: str,
        block_content: BlockContent,
    ) -> bool:
        question = self.build_question(question_number, block_id, block_content)
        return self.writer.write_question(question)
