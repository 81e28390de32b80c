"""
Unit tests for core Kollator components.

Tests configuration management, data models, importers and exporters.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from kollator.config import ConfigManager, InvalidConfigurationError, validate_threshold, validate_delimiter
from kollator.exporters import render_block, render_markdown, write_markdown, build_report, write_report
from kollator.importers import BaseImporter, MockImporter, DelimitedTextImporter, split_segments
from kollator.models import Block, Cluster, Corpus, CollationState
from kollator.dedup import Collator
from kollator.pipeline import collate_importer


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.threshold, 0.85)
        self.assertEqual(config.delimiter, "---8<---")
        self.assertEqual(config.file_pattern, "*.md")
        self.assertEqual(config.log_filename, "kollator.log")

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
collation:
  threshold: 0.9
  delimiter: "====="

paths:
  log_file: "test.log"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.threshold, 0.9)
        self.assertEqual(config.delimiter, "=====")
        self.assertEqual(config.log_filename, "test.log")
        # Sections missing from the file keep their defaults
        self.assertEqual(config.get("logging.level"), "INFO")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("collation.threshold"), 0.85)
        self.assertEqual(config.get("import.file_pattern"), "*.md")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertIn("threshold", config.get_section("collation"))

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("collation:\n  threshold: 0.5")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.threshold, 0.5)

        with open(self.config_path, 'w') as f:
            f.write("collation:\n  threshold: 0.7")

        config.reload()
        self.assertEqual(config.threshold, 0.7)

    def test_malformed_yaml_falls_back_to_defaults(self):
        """Test unreadable YAML does not break loading."""
        with open(self.config_path, 'w') as f:
            f.write("collation: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.threshold, 0.85)

    def test_out_of_range_threshold_in_file(self):
        """Test a configured threshold outside [0, 1] is rejected on access."""
        with open(self.config_path, 'w') as f:
            f.write("collation:\n  threshold: 1.5")

        config = ConfigManager(str(self.config_path))
        with self.assertRaises(InvalidConfigurationError) as ctx:
            _ = config.threshold

        self.assertEqual(ctx.exception.field, "collation.threshold")
        self.assertEqual(ctx.exception.value, 1.5)


class TestValidation(unittest.TestCase):
    """Test configuration boundary validation."""

    def test_valid_thresholds(self):
        """Test boundary and string thresholds are accepted."""
        self.assertEqual(validate_threshold(0), 0.0)
        self.assertEqual(validate_threshold(1), 1.0)
        self.assertEqual(validate_threshold("0.85"), 0.85)

    def test_invalid_thresholds(self):
        """Test out-of-range and non-numeric thresholds are rejected."""
        for value in (1.5, -0.1, "high", None, True):
            with self.assertRaises(InvalidConfigurationError):
                validate_threshold(value)

    def test_error_names_field_and_value(self):
        """Test the error message names the field and the received value."""
        with self.assertRaises(InvalidConfigurationError) as ctx:
            validate_threshold(1.5, field="threshold")

        message = str(ctx.exception)
        self.assertIn("threshold", message)
        self.assertIn("1.5", message)
        self.assertIsInstance(ctx.exception, ValueError)

    def test_delimiter_validation(self):
        """Test blank delimiters are rejected."""
        self.assertEqual(validate_delimiter("  ---8<---  "), "---8<---")
        with self.assertRaises(InvalidConfigurationError):
            validate_delimiter("   ")
        with self.assertRaises(InvalidConfigurationError):
            validate_delimiter(None)


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_block_creation(self):
        """Test Block creation through the importer helper."""
        block = BaseImporter.build_block("# Props\n\nProps are  passed down.", "guide/props.md#0", 0)

        self.assertTrue(block.block_id.startswith("block_"))
        self.assertEqual(block.source_ref, "guide/props.md#0")
        self.assertEqual(block.normalized, "props props are passed down.")
        self.assertEqual(block.title, "# Props")
        self.assertEqual(block.tokens, ["props", "props", "are", "passed", "down."])
        self.assertEqual(block.normalized_length, len(block.normalized))

    def test_block_ids_are_stable(self):
        """Test identical inputs produce identical block ids."""
        first = BaseImporter.build_block("Same text", "a.md#0", 0)
        second = BaseImporter.build_block("Same text", "a.md#0", 0)
        other = BaseImporter.build_block("Same text", "a.md#1", 1)

        self.assertEqual(first.block_id, second.block_id)
        self.assertNotEqual(first.block_id, other.block_id)

    def test_block_is_immutable(self):
        """Test blocks cannot be mutated after creation."""
        block = BaseImporter.build_block("Text", "a.md#0", 0)

        with self.assertRaises(ValidationError):
            block.content = "Changed"

    def test_block_rejects_negative_position(self):
        """Test position must be non-negative."""
        with self.assertRaises(ValidationError):
            Block(block_id="b", source_ref="s", content="c", normalized="c", position=-1)

    def test_cluster_membership(self):
        """Test cluster member bookkeeping."""
        first = BaseImporter.build_block("One", "a.md#3", 3)
        second = BaseImporter.build_block("One", "a.md#1", 1)

        cluster = Cluster(cluster_id="CL-0001", members=[first])
        cluster.add_member(second)

        self.assertEqual(cluster.size, 2)
        self.assertEqual(cluster.earliest_position, 1)
        self.assertIsNone(cluster.canonical)

    def test_corpus_defaults(self):
        """Test a new corpus starts accumulating with no clusters."""
        corpus = Corpus(threshold=0.85)

        self.assertEqual(corpus.state, CollationState.ACCUMULATING)
        self.assertEqual(corpus.canonical_blocks(), [])
        self.assertIsNone(corpus.cluster_for("missing"))


class TestImporters(unittest.TestCase):
    """Test corpus importers."""

    def test_split_on_delimiter_lines(self):
        """Test segments are split on marker lines only."""
        text = "first\n---8<---\nsecond ---8<--- inline\n  ---8<---  \nthird"
        segments = split_segments(text, "---8<---")

        self.assertEqual(segments, ["first", "second ---8<--- inline", "third"])

    def test_unterminated_last_block(self):
        """Test the last block extends to end of input."""
        segments = split_segments("one\n---8<---\ntwo\nstill two", "---8<---")

        self.assertEqual(segments, ["one", "two\nstill two"])

    def test_blank_segments_are_skipped(self):
        """Test consecutive and trailing delimiters do not create blocks."""
        segments = split_segments("---8<---\n\n---8<---\none\n---8<---\n", "---8<---")

        self.assertEqual(segments, ["one"])

    def test_empty_input(self):
        """Test empty input yields no blocks."""
        self.assertEqual(DelimitedTextImporter("").get_all_blocks(), [])
        self.assertEqual(DelimitedTextImporter(None).get_all_blocks(), [])

    def test_positions_and_source_refs(self):
        """Test blocks are numbered in input order."""
        importer = DelimitedTextImporter("a\n===\nb", source_ref="corpus.md", delimiter="===")
        blocks = importer.get_all_blocks()

        self.assertEqual([b.position for b in blocks], [0, 1])
        self.assertEqual([b.source_ref for b in blocks], ["corpus.md#0", "corpus.md#1"])

    def test_blank_delimiter_rejected(self):
        """Test a blank delimiter is an invalid configuration."""
        with self.assertRaises(InvalidConfigurationError):
            DelimitedTextImporter("text", delimiter=" ")

    def test_missing_file(self):
        """Test reading a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            DelimitedTextImporter.from_file("/nonexistent/corpus.md")

    def test_mock_importer(self):
        """Test the mock corpus collapses into its three articles."""
        blocks = MockImporter().get_all_blocks()
        self.assertEqual(len(blocks), 6)

        canonicals = Collator(0.85).collate_canonicals(blocks)
        titles = [block.title for block in canonicals]

        self.assertEqual(titles, ["# Introduction", "#   Template   Syntax", "# Lifecycle Hooks"])
        # The revised introduction is the more complete copy
        self.assertEqual(canonicals[0].position, 2)
        # Equal normalized content: the latest copy wins
        self.assertEqual(canonicals[1].position, 5)

        corpus = collate_importer(MockImporter(), threshold=0.85)
        self.assertEqual([b.block_id for b in corpus.canonical_blocks()], [b.block_id for b in canonicals])


class TestExporters(unittest.TestCase):
    """Test markdown and report output."""

    def test_render_block_keeps_leading_title(self):
        """Test a block starting with its title is emitted unchanged."""
        block = BaseImporter.build_block("# Watchers\n\nWatch state.", "w.md#0", 0)

        self.assertEqual(render_block(block), "# Watchers\n\nWatch state.")

    def test_render_block_moves_title_to_top(self):
        """Test the title line precedes the block body."""
        block = BaseImporter.build_block("Intro line.\n## Events\nEmit events.", "e.md#0", 0)

        self.assertEqual(render_block(block), "## Events\n\nIntro line.\nEmit events.")

    def test_render_block_without_title(self):
        """Test untitled blocks are emitted as is."""
        block = BaseImporter.build_block("Plain text.", "p.md#0", 0)

        self.assertEqual(render_block(block), "Plain text.")

    def test_render_markdown(self):
        """Test blocks are joined with the delimiter."""
        blocks = [
            BaseImporter.build_block("# A\n\nalpha", "x#0", 0),
            BaseImporter.build_block("# B\n\nbeta", "x#1", 1),
        ]

        rendered = render_markdown(blocks, delimiter="===")
        self.assertEqual(rendered, "# A\n\nalpha\n\n===\n\n# B\n\nbeta\n")
        self.assertEqual(render_markdown([], delimiter="==="), "")

    def test_write_markdown_rejects_blank_delimiter(self):
        """Test an invalid delimiter leaves no file behind."""
        blocks = [BaseImporter.build_block("# A\n\nalpha", "x#0", 0)]

        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "out" / "clean.md"
            with self.assertRaises(InvalidConfigurationError):
                write_markdown(blocks, path, delimiter="   ")
            self.assertFalse(path.exists())

            write_markdown(blocks, path, delimiter="===")
            self.assertEqual(path.read_text(encoding="utf-8"), "# A\n\nalpha\n")

    def test_report(self):
        """Test the report lists clusters with member differences."""
        blocks = DelimitedTextImporter(
            "# Props\n\nprops flow down from parent to child\n"
            "---8<---\n"
            "# Props\n\nprops flow down from parent to child component",
            delimiter="---8<---"
        ).get_all_blocks()
        corpus = Collator(0.85).collate(blocks)

        report = build_report(corpus)
        self.assertEqual(report["block_count"], 2)
        self.assertEqual(report["cluster_count"], 1)
        self.assertEqual(report["duplicates_removed"], 1)
        self.assertEqual(report["state"], "done")

        cluster = report["clusters"][0]
        self.assertEqual(cluster["canonical"]["position"], 1)
        other = [m for m in cluster["members"] if m["position"] == 0][0]
        self.assertLess(other["similarity"], 1.0)
        self.assertEqual(other["differences"][0]["tag"], "delete")
        self.assertEqual(other["differences"][0]["a_text"], "component")

        with tempfile.TemporaryDirectory() as temp_dir:
            path = write_report(corpus, Path(temp_dir) / "out" / "report.json")
            with open(path, encoding='utf-8') as f:
                self.assertEqual(json.load(f)["cluster_count"], 1)


if __name__ == '__main__':
    unittest.main()
