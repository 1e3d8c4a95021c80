class QuizMigratorError(Exception):
    """Base class for errors raised by the migrator itself."""


class MissingOptionsError(QuizMigratorError):
    """A question block on the source page has no nested option blocks."""

    def __init__(self, block_number: int, block_text: str):
        self.block_number = block_number
        self.block_text = block_text
        super().__init__(
            f"The question {block_number} doesn't have children blocks. "
            f"Block text: {block_text}"
        )
