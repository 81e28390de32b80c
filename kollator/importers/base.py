"""
Base importer interface for Kollator.

This module defines the abstract interface that all corpus importers must implement.
"""

from abc import ABC, abstractmethod
import hashlib
from typing import List

from ..models import Block
from ..dedup.normalizer import normalize_text, extract_title


class BaseImporter(ABC):
    """
    Abstract base class for all corpus importers.

    Each importer converts a specific source (a text stream, a directory of
    markdown files, ...) into an ordered list of Block objects.
    """

    @abstractmethod
    def get_all_blocks(self) -> List[Block]:
        """
        Retrieve all blocks from the data source.

        Returns:
            List of Block objects in corpus order
        """
        pass

    @staticmethod
    def build_block(content: str, source_ref: str, position: int) -> Block:
        """
        Create a Block from raw text, filling in the derived fields.

        Args:
            content: Raw block text
            source_ref: Human-readable source reference
            position: Index of the block in the corpus

        Returns:
            The new Block
        """
        unique_str = f"{source_ref}\x00{content}"
        block_id = f"block_{hashlib.sha1(unique_str.encode('utf-8')).hexdigest()[:12]}"

        return Block(
            block_id=block_id,
            source_ref=source_ref,
            content=content,
            normalized=normalize_text(content),
            position=position,
            title=extract_title(content)
        )
