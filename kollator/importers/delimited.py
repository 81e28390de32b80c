"""
Delimited text importers for Kollator.

This module splits text on a literal delimiter marker line and converts each
segment into a Block. Sources can be an in-memory string, a single file or a
directory tree of markdown files.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..config import config, validate_delimiter
from ..models import Block
from .base import BaseImporter


def split_segments(text: str, delimiter: str) -> List[str]:
    """
    Split text into segments on lines consisting only of the delimiter.

    A final segment with no closing delimiter extends to the end of input.
    Segments are stripped of surrounding whitespace and empty ones are dropped.

    Args:
        text: The full input text
        delimiter: The marker that separates blocks

    Returns:
        Non-empty segments in input order
    """
    if not text:
        return []

    marker = delimiter.strip()
    segments: List[str] = []
    current: List[str] = []

    for line in text.splitlines():
        if marker and line.strip() == marker:
            segments.append("\n".join(current))
            current = []
        else:
            current.append(line)

    # Unterminated last block
    segments.append("\n".join(current))

    return [segment.strip() for segment in segments if segment.strip()]


class DelimitedTextImporter(BaseImporter):
    """
    Importer for a single text stream of delimiter-separated blocks.
    """

    def __init__(self, text: str, source_ref: str = "<text>", delimiter: Optional[str] = None,
                 start_position: int = 0):
        """
        Initialize the importer.

        Args:
            text: The corpus text
            source_ref: Reference prefix used for every block of this text
            delimiter: Block delimiter marker (defaults to collation.delimiter)
            start_position: Position assigned to the first block
        """
        self.text = text or ""
        self.source_ref = source_ref
        self.delimiter = validate_delimiter(delimiter, field="delimiter") if delimiter is not None else config.delimiter
        self.start_position = start_position

    @classmethod
    def from_file(cls, path: Union[str, Path], delimiter: Optional[str] = None) -> "DelimitedTextImporter":
        """
        Create an importer for the contents of a UTF-8 text file.

        Args:
            path: Path to the file
            delimiter: Block delimiter marker (defaults to collation.delimiter)

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Input file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()

        logging.info(f"Read {len(text)} characters from {file_path}")
        return cls(text, source_ref=str(file_path), delimiter=delimiter)

    def get_all_blocks(self) -> List[Block]:
        """
        Split the text into blocks.

        Returns:
            List of Block objects in input order
        """
        segments = split_segments(self.text, self.delimiter)

        blocks = [
            self.build_block(segment, f"{self.source_ref}#{index}", self.start_position + index)
            for index, segment in enumerate(segments)
        ]

        logging.info(f"Found {len(blocks)} blocks in {self.source_ref}")
        return blocks


class DirectoryImporter(BaseImporter):
    """
    Importer for a directory tree of markdown files.

    Every matching file is split on the delimiter; positions run continuously
    across files, which are visited in sorted path order.
    """

    def __init__(self, root: Union[str, Path], pattern: Optional[str] = None,
                 delimiter: Optional[str] = None):
        """
        Initialize the directory importer.

        Args:
            root: Directory to scan recursively
            pattern: Glob pattern for files to include (defaults to import.file_pattern)
            delimiter: Block delimiter marker (defaults to collation.delimiter)

        Raises:
            FileNotFoundError: If root is not a directory
        """
        self.root = Path(root)
        self.pattern = pattern or config.file_pattern
        self.delimiter = validate_delimiter(delimiter, field="delimiter") if delimiter is not None else config.delimiter

        if not self.root.is_dir():
            raise FileNotFoundError(f"Input directory not found: {self.root}")

        logging.info(f"Initialized directory importer for: {self.root} ({self.pattern})")

    def get_all_blocks(self) -> List[Block]:
        """
        Read every matching file and split it into blocks.

        Returns:
            List of Block objects across all files
        """
        blocks: List[Block] = []
        files = sorted(p for p in self.root.rglob(self.pattern) if p.is_file())

        for file_path in files:
            with open(file_path, 'r', encoding='utf-8') as f:
                text = f.read()

            importer = DelimitedTextImporter(
                text,
                source_ref=file_path.relative_to(self.root).as_posix(),
                delimiter=self.delimiter,
                start_position=len(blocks)
            )
            blocks.extend(importer.get_all_blocks())

        logging.info(f"Importer finished. Found {len(blocks)} blocks in {len(files)} files.")
        return blocks
