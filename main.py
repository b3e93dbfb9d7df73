#!/usr/bin/env python3
"""
Heptavault - Heptabase to Obsidian exporter

Main entry point. Loads a Heptabase JSON export, converts cards to Markdown and
whiteboards to JSON Canvas files, and writes both sets to the output directory.
"""

import logging
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from heptavault import __version__
from heptavault.config import ConfigManager, config as default_config
from heptavault.exporter import Exporter
from heptavault.importers import BaseImporter, HeptabaseJSONImporter, SampleImporter
from heptavault.models import ExportArtifact, InvalidExportError
from heptavault.writers import get_writer


def setup_logging(config: ConfigManager):
    """Configure logging for the application."""
    level = getattr(logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO)
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def write_artifacts(artifacts: List[ExportArtifact], output_format: str,
                    output_dir: Path, archive_name: str) -> Optional[Path]:
    """
    Write one artifact set as an archive or a directory.

    Args:
        artifacts: The artifact set
        output_format: "zip" or "directory"
        output_dir: Directory that receives the output
        archive_name: Archive file name, e.g. "Cards.zip"

    Returns:
        The written path, or None when there was nothing to write
    """
    if not artifacts:
        return None

    if output_format == "zip":
        target = output_dir / archive_name
    else:
        target = output_dir / Path(archive_name).stem

    return get_writer(output_format).write(artifacts, target)


def run_export(importer: BaseImporter, config: ConfigManager, only: str = "all",
               cards_path: Optional[str] = None, output_dir: Optional[str] = None,
               output_format: Optional[str] = None) -> int:
    """
    Execute the export pipeline: load -> convert -> write.

    Returns:
        Number of files exported
    """
    export = importer.load()
    exporter = Exporter(export)

    target_dir = Path(output_dir or config.output_dir)
    fmt = output_format or config.output_format
    exported = 0

    if only in ("all", "cards"):
        cards = exporter.export_cards()
        written = write_artifacts(cards, fmt, target_dir, config.cards_archive)
        if written:
            print(f"Successfully exported {len(cards)} cards to {written}")
            exported += len(cards)
        else:
            print("No cards to export")

    if only in ("all", "canvas"):
        prefix = config.cards_path if cards_path is None else cards_path
        canvases = exporter.export_canvases(prefix)
        written = write_artifacts(canvases, fmt, target_dir, config.canvas_archive)
        if written:
            print(f"Successfully exported {len(canvases)} canvas files to {written}")
            exported += len(canvases)
        else:
            print("No whiteboards to export")

    return exported


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Heptavault - Convert a Heptabase export into an Obsidian vault",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py All-Data.json                        # Write Cards.zip and Canvas.zip to ./export
  python main.py All-Data.json --only canvas          # Only rebuild whiteboards
  python main.py All-Data.json --cards-path Notes/    # Canvas file nodes point into Notes/
  python main.py All-Data.json --format directory     # Write plain folders instead of ZIP files
  python main.py --sample                             # Export the built-in sample dataset
        """
    )

    parser.add_argument(
        "export_file",
        nargs="?",
        help="Path to the Heptabase JSON export"
    )

    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in sample dataset instead of an export file"
    )

    parser.add_argument(
        "--only",
        choices=["all", "cards", "canvas"],
        default="all",
        help="Which artifact set to export (default: all)"
    )

    parser.add_argument(
        "--cards-path",
        type=str,
        help="Vault folder prefix for canvas file nodes (default from config: Cards/)"
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        help="Directory to write exports to (default from config: export)"
    )

    parser.add_argument(
        "--format",
        choices=["zip", "directory"],
        help="Output format (default from config: zip)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Heptavault {__version__}"
    )

    args = parser.parse_args(argv)
    if not args.sample and not args.export_file:
        parser.error("an export file is required unless --sample is given")
    return args


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)
    config = ConfigManager(args.config) if args.config else default_config
    setup_logging(config)

    logging.info("Heptavault - Heptabase to Obsidian exporter")

    importer: BaseImporter
    if args.sample:
        importer = SampleImporter()
    else:
        importer = HeptabaseJSONImporter(args.export_file)

    try:
        run_export(
            importer,
            config,
            only=args.only,
            cards_path=args.cards_path,
            output_dir=args.output_dir,
            output_format=args.format,
        )
    except InvalidExportError as e:
        logging.error(f"Export failed: {e}")
        print(f"\nExport failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logging.info("Export interrupted by user")
        print("\nExport interrupted.")
    except OSError as e:
        logging.error(f"Could not write export: {e}")
        print(f"\nCould not write export: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
