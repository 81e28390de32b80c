"""
Mock importer for testing Kollator.

This module provides a small hardcoded documentation corpus, full of duplicate
and revised copies of the same guide articles, for exercising the pipeline
without real input files.
"""

from typing import List

from ..models import Block
from .base import BaseImporter


INTRODUCTION = """# Introduction

Vue is a JavaScript framework for building user interfaces. It builds on top of
standard HTML, CSS and JavaScript and provides a declarative, component-based
programming model.

## Declarative Rendering

Vue extends standard HTML with a template syntax that allows us to describe
HTML output based on JavaScript state."""

INTRODUCTION_REVISED = INTRODUCTION + """

## Reactivity

Vue automatically tracks state changes and updates the DOM."""

TEMPLATE_SYNTAX = """# Template Syntax

Vue uses an HTML-based template syntax that allows you to declaratively bind
the rendered DOM to the underlying component instance's data.

## Text Interpolation

The most basic form of data binding is text interpolation using the
"Mustache" syntax (double curly braces):

- `{{ msg }}` is replaced with the value of the `msg` property.
- It is updated whenever the `msg` property changes."""

TEMPLATE_SYNTAX_REFORMATTED = """#   Template   Syntax

Vue uses an HTML-based template syntax that allows you to declaratively bind the rendered DOM
to the underlying component instance's data.

## Text Interpolation

The most basic form of data binding is text interpolation using the "Mustache" syntax (double curly braces):

* {{ msg }} is replaced with the value of the msg property.
* It is updated whenever the msg property changes."""

LIFECYCLE_HOOKS = """# Lifecycle Hooks

Each Vue component instance goes through a series of initialization steps when
it's created. Along the way, it also runs functions called lifecycle hooks,
giving users the opportunity to add their own code at specific stages.

## Registering Lifecycle Hooks

The `onMounted` hook can be used to run code after the component has finished
the initial rendering and created the DOM nodes."""


class MockImporter(BaseImporter):
    """
    Mock importer that returns hardcoded guide articles.

    The corpus holds three logical documents: an introduction with an earlier
    and a revised copy, a template syntax article with an exact duplicate and a
    reformatted copy, and a single lifecycle hooks article.
    """

    def __init__(self):
        """Initialize the mock importer with test data."""
        self._test_blocks = self._create_test_blocks()

    def get_all_blocks(self) -> List[Block]:
        """
        Return all hardcoded test blocks.

        Returns:
            List of test Block objects
        """
        return self._test_blocks

    def _create_test_blocks(self) -> List[Block]:
        """
        Create hardcoded test blocks.

        Returns:
            List of test blocks covering duplicates, revisions and reformatting
        """
        articles = [
            ("guide/introduction.md", INTRODUCTION),
            ("guide/template-syntax.md", TEMPLATE_SYNTAX),
            ("guide/introduction.md", INTRODUCTION_REVISED),
            ("guide/template-syntax.md", TEMPLATE_SYNTAX),
            ("guide/lifecycle.md", LIFECYCLE_HOOKS),
            ("guide/template-syntax.md", TEMPLATE_SYNTAX_REFORMATTED),
        ]

        return [
            self.build_block(content, f"{source}#{position}", position)
            for position, (source, content) in enumerate(articles)
        ]
