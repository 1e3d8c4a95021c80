"""
Notion Quiz Migrator
====================
Moves quiz questions written as nested numbered lists on a Notion page into
rows of a Notion database.

Architecture:
    - Notion Client: The official notion-client SDK, built from the config
    - Block Fetcher: Reads every child block of a block, following pagination
    - Question Extractor: Turns numbered list items into quiz questions
    - Destination Writer: Maps each question onto a database row
    - Engine: Wires configuration, logging and the components together

Version: 1.0.0
"""

__version__ = "1.0.0"
