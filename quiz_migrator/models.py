"""
Data Models
===========
Pydantic models for Notion blocks, quiz questions and destination rows.
Blocks are read-only views over the Notion API payload; rows render to the
property map the Notion pages endpoint expects.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


# ─── Enums ────────────────────────────────────────────────────────────────────


class BlockType(str, Enum):
    """Notion block types the migrator reacts to."""
    NUMBERED_LIST_ITEM = "numbered_list_item"
    IMAGE = "image"
    PARAGRAPH = "paragraph"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"


# ─── Destination Columns ──────────────────────────────────────────────────────

COLUMN_NUM = "Num"
COLUMN_QUESTION_TEXT = "Question Text"
COLUMN_QUESTION_TYPE = "Question Type"
COLUMN_OPTIONS = ("Option 1", "Option 2", "Option 3")
COLUMN_CORRECT_ANSWER = "Correct Answer"
COLUMN_TIME_IN_SECONDS = "Time in seconds"
COLUMN_IMAGE_LINK = "Image Link"

# The destination database only has room for this many options.
MAX_OPTIONS = len(COLUMN_OPTIONS)


# ─── Block Models ─────────────────────────────────────────────────────────────


class TextContent(BaseModel):
    content: str = ""
    link: Optional[dict] = None


class RichTextRun(BaseModel):
    """A single run of rich text inside a block."""
    model_config = ConfigDict(extra="ignore")

    type: str = "text"
    text: Optional[TextContent] = None
    plain_text: str = ""

    @property
    def content(self) -> str:
        if self.text is not None:
            return self.text.content
        return self.plain_text


class BlockContent(BaseModel):
    """
    Type-specific payload of a block (the object stored under the block's
    type key). Only rich text and colour are read; everything else is kept.
    """
    model_config = ConfigDict(extra="allow")

    rich_text: list[RichTextRun] = Field(default_factory=list)
    color: str = "default"

    @property
    def first_text(self) -> str:
        """Content of the first rich text run, or "" for an empty block."""
        if not self.rich_text:
            return ""
        return self.rich_text[0].content


class Block(BaseModel):
    """
    Read-only view of a Notion block.
    The payload lives under a key named after the block type, so it is
    captured as an extra field and exposed through `content`.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    has_children: bool = False

    @property
    def content(self) -> BlockContent:
        payload = (self.model_extra or {}).get(self.type) or {}
        return BlockContent.model_validate(payload)

    @property
    def text(self) -> str:
        return self.content.first_text

    def is_type(self, block_type: BlockType) -> bool:
        return self.type == block_type.value


class BlockChildrenPage(BaseModel):
    """One page of a block children listing."""
    model_config = ConfigDict(extra="ignore")

    results: list[Block] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None


# ─── Question Model ──────────────────────────────────────────────────────────


class QuizQuestion(BaseModel):
    """
    A question read from the source page.
    Built once per numbered list item and discarded after its row is written.
    """
    question_number: int = Field(ge=1, frozen=True)
    question_text: str = ""
    options: list[str] = Field(default_factory=list)
    correct_answer: Optional[int] = None
    image_link: Optional[str] = None

    @model_validator(mode="after")
    def _check_correct_answer(self) -> QuizQuestion:
        if self.correct_answer is not None and not (
            1 <= self.correct_answer <= len(self.options)
        ):
            raise ValueError(
                f"correct_answer {self.correct_answer} is outside "
                f"options 1..{len(self.options)}"
            )
        return self


# ─── Destination Row ─────────────────────────────────────────────────────────


def _rich_text(content: Optional[str]) -> list[dict]:
    if content is None:
        return []
    return [{"text": {"content": content}}]


class QuestionRow(BaseModel):
    """
    One row of the destination database, one field per column.
    `to_properties` renders the Notion property map.
    """
    model_config = ConfigDict(frozen=True)

    num: int = Field(ge=1)
    question_text: str
    question_type: str
    option_1: Optional[str] = None
    option_2: Optional[str] = None
    option_3: Optional[str] = None
    correct_answer: Optional[int] = None
    time_in_seconds: int = Field(ge=0)
    image_link: Optional[str] = None

    @model_validator(mode="after")
    def _check_correct_answer_column(self) -> QuestionRow:
        # The correct answer must be one of the options that were kept
        if self.correct_answer is not None and self.correct_answer > MAX_OPTIONS:
            raise ValueError(
                f"Correct answer {self.correct_answer} of question {self.num} "
                f"is past the last option column (Option {MAX_OPTIONS})"
            )
        return self

    @classmethod
    def from_question(
        cls,
        question: QuizQuestion,
        time_in_seconds: int,
        question_type: str,
    ) -> QuestionRow:
        """Map a question onto the row. Options past MAX_OPTIONS are dropped."""
        options: list[Optional[str]] = list(question.options[:MAX_OPTIONS])
        options += [None] * (MAX_OPTIONS - len(options))

        return cls(
            num=question.question_number,
            question_text=question.question_text,
            question_type=question_type,
            option_1=options[0],
            option_2=options[1],
            option_3=options[2],
            correct_answer=question.correct_answer,
            time_in_seconds=time_in_seconds,
            image_link=question.image_link,
        )

    @property
    def options(self) -> tuple[Optional[str], ...]:
        return (self.option_1, self.option_2, self.option_3)

    def to_properties(self) -> dict[str, Any]:
        properties: dict[str, Any] = {
            COLUMN_NUM: {"number": self.num},
            COLUMN_QUESTION_TEXT: {"title": _rich_text(self.question_text)},
            COLUMN_QUESTION_TYPE: {"select": {"name": self.question_type}},
        }
        for column, option in zip(COLUMN_OPTIONS, self.options):
            properties[column] = {"rich_text": _rich_text(option)}
        properties[COLUMN_CORRECT_ANSWER] = {"number": self.correct_answer}
        properties[COLUMN_TIME_IN_SECONDS] = {"number": self.time_in_seconds}
        properties[COLUMN_IMAGE_LINK] = {"url": self.image_link}
        return properties


# ─── Run Report ──────────────────────────────────────────────────────────────


class MigrationReport(BaseModel):
    """Summary of one migration run."""
    source_page_id: str = ""
    dest_database_id: str = ""
    blocks_seen: int = 0
    questions_detected: int = 0
    rows_written: int = 0
    rows_failed: int = 0
    failed_question_numbers: list[int] = Field(default_factory=list)
    dry_run: bool = False
    elapsed_seconds: float = 0.0

    @computed_field
    @property
    def success_rate(self) -> float:
        if self.questions_detected == 0:
            return 0.0
        return round(self.rows_written / self.questions_detected * 100, 2)
