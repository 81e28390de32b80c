"""
End-to-end collation helpers.

These tie an importer to a Collator: parse, normalize, cluster, select.
"""

import sys
from pathlib import Path
from typing import Any, Optional, Union

from .dedup import Collator
from .importers import BaseImporter, DelimitedTextImporter, DirectoryImporter
from .models import Corpus


def importer_for_path(path: Union[str, Path], delimiter: Optional[str] = None) -> BaseImporter:
    """
    Pick the importer for an input path.

    Args:
        path: A file, a directory of markdown files, or '-' for stdin
        delimiter: Block delimiter marker (defaults to configuration)

    Raises:
        FileNotFoundError: If the path does not exist
    """
    if str(path) == "-":
        return DelimitedTextImporter(sys.stdin.read(), source_ref="<stdin>", delimiter=delimiter)

    source = Path(path)
    if source.is_dir():
        return DirectoryImporter(source, delimiter=delimiter)
    return DelimitedTextImporter.from_file(source, delimiter=delimiter)


def collate_importer(importer: BaseImporter, threshold: Optional[Any] = None) -> Corpus:
    """
    Collate every block an importer yields.

    The threshold is validated before anything is read.
    """
    collator = Collator(threshold)
    return collator.collate(importer.get_all_blocks())


def collate_text(text: str, threshold: Optional[Any] = None, delimiter: Optional[str] = None) -> Corpus:
    """
    Collate an in-memory corpus.

    Args:
        text: Delimiter-separated blocks
        threshold: Minimum similarity to merge blocks (defaults to configuration)
        delimiter: Block delimiter marker (defaults to configuration)

    Returns:
        The finalized Corpus
    """
    return collate_importer(DelimitedTextImporter(text, delimiter=delimiter), threshold)


def collate_path(path: Union[str, Path], threshold: Optional[Any] = None,
                 delimiter: Optional[str] = None) -> Corpus:
    """
    Collate a file, or every markdown file under a directory.

    Raises:
        FileNotFoundError: If the path does not exist
    """
    return collate_importer(importer_for_path(path, delimiter), threshold)
