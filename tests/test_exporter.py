"""
Tests for export orchestration, writers and the command-line pipeline.
"""

import json
import tempfile
import unittest
import zipfile
from pathlib import Path
from unittest.mock import patch

from heptavault.config import ConfigManager
from heptavault.converters import MarkdownConverter
from heptavault.exporter import Exporter
from heptavault.importers import SampleImporter
from heptavault.models import ExportArtifact, HeptabaseExport
from heptavault.writers import DirectoryWriter, ZipArchiveWriter, get_writer

import main


def heading_doc(level, value):
    return {"type": "doc", "content": [
        {"type": "heading", "attrs": {"level": level}, "content": [{"type": "text", "text": value}]},
    ]}


class TestExporter(unittest.TestCase):
    """Test the Markdown and Canvas artifact sets."""

    def setUp(self):
        self.export = HeptabaseExport.from_raw({
            "cardList": [
                {"id": "c1", "title": "Hello/World", "content": heading_doc(2, "Hi"), "isTrashed": False},
                {"id": "c2", "title": "Trashed", "content": "gone", "isTrashed": True},
                {"id": "c3", "title": "  ", "content": "blank title", "isTrashed": False},
                {"id": "c4", "title": "Hello:World", "content": "duplicate name", "isTrashed": False},
                {"id": "c5", "title": "Plain", "content": "Just text", "isTrashed": False},
            ],
            "whiteBoardList": [{"id": "w1", "name": "Board"}, {"id": "w2", "name": "Empty"}],
            "cardInstances": [
                {"id": "i1", "cardId": "c1", "whiteboardId": "w1", "x": 0, "y": 0, "width": 300, "height": 200},
                {"id": "i2", "cardId": "c5", "whiteboardId": "w1", "x": 100, "y": 0, "width": 300, "height": 200},
            ],
            "connections": [
                {"id": "e1", "whiteboardId": "w1", "beginId": "i2", "beginObjectType": "cardInstance",
                 "endId": "i1", "endObjectType": "cardInstance"},
            ],
            "sections": [],
        })
        self.exporter = Exporter(self.export)

    def test_markdown_artifacts(self):
        """Test the end-to-end card example and eligibility rules."""
        artifacts = self.exporter.export_cards()
        by_name = {artifact.filename: artifact.content for artifact in artifacts}

        self.assertEqual(by_name["Hello÷World.md"], "## Hi")
        self.assertEqual(by_name["Plain.md"], "Just text")
        # c2 trashed, c3 untitled, c4 collides with c1
        self.assertEqual(len(artifacts), 2)

    def test_card_conversion_error_is_isolated(self):
        """Test one failing card does not abort the others."""
        original = MarkdownConverter.convert

        def flaky_convert(converter, content):
            if content == "Just text":
                raise RuntimeError("boom")
            return original(converter, content)

        with patch.object(MarkdownConverter, "convert", flaky_convert):
            artifacts = self.exporter.export_cards()

        self.assertEqual([artifact.filename for artifact in artifacts], ["Hello÷World.md"])

    def test_canvas_artifacts(self):
        artifacts = self.exporter.export_canvases("Cards/")
        self.assertEqual([artifact.filename for artifact in artifacts], ["Board.canvas", "Empty.canvas"])

        board = json.loads(artifacts[0].content)
        self.assertEqual([node["file"] for node in board["nodes"]], ["Cards/Hello÷World.md", "Cards/Plain.md"])
        self.assertEqual(len(board["edges"]), 1)
        self.assertEqual((board["edges"][0]["fromSide"], board["edges"][0]["toSide"]), ("right", "left"))

        self.assertEqual(json.loads(artifacts[1].content), {"nodes": [], "edges": []})

    def test_duplicate_whiteboard_names_keep_first(self):
        exporter = Exporter(HeptabaseExport.from_raw({
            "cardList": [],
            "whiteBoardList": [{"id": "w1", "name": "Dup"}, {"id": "w2", "name": "Dup"}, {"id": "w3", "name": "Other"}],
        }))
        artifacts = exporter.export_canvases()
        self.assertEqual([artifact.filename for artifact in artifacts], ["Dup.canvas", "Other.canvas"])

    def test_default_cards_path(self):
        board = json.loads(self.exporter.export_canvases()[0].content)
        self.assertTrue(board["nodes"][0]["file"].startswith("Cards/"))

    def test_repeated_runs_are_stable(self):
        """Test two runs agree on everything but identifiers."""
        first = Exporter(self.export)
        second = Exporter(self.export)

        self.assertEqual(first.export_cards(), second.export_cards())

        def structure(artifacts):
            result = []
            for artifact in artifacts:
                canvas = json.loads(artifact.content)
                nodes = [{k: v for k, v in node.items() if k != "id"} for node in canvas["nodes"]]
                edges = [{k: v for k, v in edge.items() if k not in ("id", "fromNode", "toNode")}
                         for edge in canvas["edges"]]
                result.append((artifact.filename, nodes, edges))
            return result

        self.assertEqual(structure(first.export_canvases()), structure(second.export_canvases()))

    def test_empty_dataset(self):
        """Test empty results are reported as empty lists, not errors."""
        exporter = Exporter(HeptabaseExport.from_raw({"cardList": [], "whiteBoardList": []}))
        self.assertEqual(exporter.export_cards(), [])
        self.assertEqual(exporter.export_canvases(), [])


class TestWriters(unittest.TestCase):
    """Test artifact writers."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.artifacts = [
            ExportArtifact(filename="Hello÷World.md", content="## Hi"),
            ExportArtifact(filename="Plain.md", content="Just text"),
        ]

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_zip_writer(self):
        path = ZipArchiveWriter().write(self.artifacts, self.root / "out" / "Cards.zip")
        with zipfile.ZipFile(path) as archive:
            self.assertEqual(sorted(archive.namelist()), ["Hello÷World.md", "Plain.md"])
            self.assertEqual(archive.read("Hello÷World.md").decode("utf-8"), "## Hi")

    def test_directory_writer(self):
        path = DirectoryWriter().write(self.artifacts, self.root / "Cards")
        self.assertEqual((path / "Plain.md").read_text(encoding="utf-8"), "Just text")

    def test_directory_writer_stays_inside_target(self):
        """Test names that climb out of the target directory are skipped."""
        artifacts = self.artifacts + [
            ExportArtifact(filename="../escaped.canvas", content="{}"),
            ExportArtifact(filename="/tmp/absolute.canvas", content="{}"),
            ExportArtifact(filename="Nested/inside.canvas", content="{}"),
        ]
        target = self.root / "out" / "Canvas"
        DirectoryWriter().write(artifacts, target)

        self.assertFalse((self.root / "out" / "escaped.canvas").exists())
        self.assertTrue((target / "Nested" / "inside.canvas").exists())
        self.assertEqual(sorted(p.name for p in (self.root / "out").iterdir()), ["Canvas"])

    def test_zip_writer_skips_escaping_names(self):
        artifacts = self.artifacts + [
            ExportArtifact(filename="../escaped.canvas", content="{}"),
            ExportArtifact(filename="/etc/absolute.canvas", content="{}"),
            ExportArtifact(filename="C:\\Windows\\drive.canvas", content="{}"),
        ]
        path = ZipArchiveWriter().write(artifacts, self.root / "Canvas.zip")
        with zipfile.ZipFile(path) as archive:
            self.assertEqual(sorted(archive.namelist()), ["Hello÷World.md", "Plain.md"])

    def test_get_writer(self):
        self.assertIsInstance(get_writer("zip"), ZipArchiveWriter)
        self.assertIsInstance(get_writer("directory"), DirectoryWriter)
        with self.assertRaises(ValueError):
            get_writer("tarball")


class TestPipeline(unittest.TestCase):
    """Test the command-line export pipeline."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.config = ConfigManager(str(self.root / "missing.yaml"))

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_run_export_writes_archives(self):
        count = main.run_export(SampleImporter(), self.config, output_dir=str(self.root))

        # Two live cards plus one whiteboard
        self.assertEqual(count, 3)
        with zipfile.ZipFile(self.root / "Cards.zip") as archive:
            self.assertEqual(sorted(archive.namelist()), ["Meeting 2024÷05÷22.md", "Project Phoenix.md"])
            project = archive.read("Project Phoenix.md").decode("utf-8")
        self.assertEqual(
            project,
            "# Project Phoenix\n\n"
            "Kickoff notes are in [[Meeting 2024/05/22]].\n\n"
            "- Migrate the **database**\n"
            "- Ship v2"
        )
        with zipfile.ZipFile(self.root / "Canvas.zip") as archive:
            self.assertEqual(archive.namelist(), ["Roadmap.canvas"])

    def test_run_export_directory_canvas_only(self):
        count = main.run_export(SampleImporter(), self.config, only="canvas", cards_path="Vault/",
                                output_dir=str(self.root), output_format="directory")

        self.assertEqual(count, 1)
        canvas = json.loads((self.root / "Canvas" / "Roadmap.canvas").read_text(encoding="utf-8"))
        files = [node["file"] for node in canvas["nodes"] if node["type"] == "file"]
        self.assertEqual(files, ["Vault/Project Phoenix.md", "Vault/Meeting 2024÷05÷22.md"])
        self.assertFalse((self.root / "Cards").exists())

    def test_parse_arguments_requires_input(self):
        with self.assertRaises(SystemExit):
            main.parse_arguments([])
        args = main.parse_arguments(["--sample", "--only", "cards"])
        self.assertTrue(args.sample)
        self.assertEqual(args.only, "cards")


if __name__ == "__main__":
    unittest.main()
