"""Output writers for collated corpora."""

from .markdown import render_block, render_markdown, write_markdown
from .report import build_report, write_report

__all__ = ["render_block", "render_markdown", "write_markdown", "build_report", "write_report"]
