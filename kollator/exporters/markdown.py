"""
Markdown output for collated corpora.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..config import config, validate_delimiter
from ..models import Block


def render_block(block: Block) -> str:
    """
    Render a block with its title line on top.

    A block whose first non-blank line is already its title is returned as is;
    otherwise the title line is moved to the top of the block.

    Args:
        block: The block to render

    Returns:
        The rendered block text
    """
    content = block.content.strip()
    if not block.title:
        return content

    lines = content.splitlines()
    first_line = next((line for line in lines if line.strip()), "")
    if first_line.strip() == block.title:
        return content

    body: List[str] = []
    title_removed = False
    for line in lines:
        if not title_removed and line.strip() == block.title:
            title_removed = True
            continue
        body.append(line)

    return f"{block.title}\n\n" + "\n".join(body).strip()


def render_markdown(blocks: Sequence[Block], delimiter: Optional[str] = None) -> str:
    """
    Render canonical blocks as a single document.

    Args:
        blocks: Blocks to emit, in output order
        delimiter: Marker placed between blocks (defaults to collation.delimiter)

    Returns:
        The document text; empty when there are no blocks
    """
    if not blocks:
        return ""

    marker = validate_delimiter(delimiter, field="delimiter") if delimiter is not None else config.delimiter
    separator = f"\n\n{marker}\n\n"
    return separator.join(render_block(block) for block in blocks) + "\n"


def write_markdown(blocks: Sequence[Block], path: Union[str, Path], delimiter: Optional[str] = None) -> Path:
    """
    Write canonical blocks to a markdown file.

    Args:
        blocks: Blocks to emit, in output order
        path: Destination file
        delimiter: Marker placed between blocks (defaults to collation.delimiter)

    Returns:
        The path that was written
    """
    text = render_markdown(blocks, delimiter)

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(text)

    logging.info(f"Wrote {len(blocks)} blocks to {file_path}")
    return file_path
