"""
Block Fetcher
=============
Reads every child block beneath a Notion block, following the cursor
pagination of the children endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from notion_client import Client

from .models import Block, BlockChildrenPage

logger = logging.getLogger(__name__)


class BlockFetcher:
    """
    Collects the children of a block across all result pages.

    Errors from the client are not caught: a failed page fails the fetch.
    """

    def __init__(self, client: Client, page_size: int = 100):
        self.client = client
        self.page_size = page_size

    def fetch_all_children(self, block_id: str) -> list[Block]:
        """
        Return all children of `block_id` in store order.

        Args:
            block_id: Page or block ID whose children are listed.

        Returns:
            Concatenation of every result page.
        """
        children: list[Block] = []
        cursor: Optional[str] = None
        pages = 0

        while True:
            request: dict[str, Any] = {
                "block_id": block_id,
                "page_size": self.page_size,
            }
            # The first request carries no cursor
            if cursor:
                request["start_cursor"] = cursor

            response = self.client.blocks.children.list(**request)
            page = BlockChildrenPage.model_validate(response)
            children.extend(page.results)
            pages += 1

            if not page.has_more:
                break
            cursor = page.next_cursor

        logger.debug(
            f"Fetched {len(children)} children of {block_id} "
            f"in {pages} page(s)"
        )
        return children
