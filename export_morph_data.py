# -*- coding: utf-8 -*-
"""
Export morph data from a DAZ Studio .duf scene: one morphdata_<figureId>.json per figure.

Flow:
  1. read_duf_file: check extension, gunzip, UTF-8 decode.
  2. dson_document: parse the DSON text.
  3. resolve_morphs: figures + geometries, then modifiers -> per-figure morph lists.
  4. write_morph_data: one JSON array per figure, next to the .duf unless --output-dir is given.

Nothing is written unless the whole document resolves. Exit status: 0 ok, 1 failed, 2 usage.

Examples:
  python export_morph_data.py D:\\Scenes\\Victoria.duf
  python export_morph_data.py Victoria.duf -o morphs --single-precision --log-file export.log
  python export_morph_data.py Victoria.duf --config export_config.json --pause
"""
import argparse
import sys
from pathlib import Path

from dson_document import parse_dson
from export_config import ExportConfig, load_config
from logging_config import get_logger, setup_logging
from morph_export_errors import ConfigError, MorphExportError
from read_duf_file import read_duf_text
from resolve_morphs import resolve_morphs
from write_morph_data import write_all_morph_data

logger = get_logger(__name__)

USAGE_PROMPT = "Please drag and drop a .duf file."
DONE_MESSAGE = ".duf morph extraction done."


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Export per-figure morph data (id, url, value) from a DAZ .duf file")
    ap.add_argument("duf", type=Path, nargs="?", default=None, help="Path to .duf scene file")
    ap.add_argument("-o", "--output-dir", type=Path, default=None, help="Directory for morphdata_*.json (default: next to the .duf)")
    ap.add_argument("--config", type=Path, default=None, help="JSON config file (keys: output_dir, indent, single_precision, log_file, log_level, pause)")
    ap.add_argument("--indent", type=int, default=None, metavar="N", help="JSON indent (default 2)")
    ap.add_argument("--single-precision", dest="single_precision", action="store_true", default=None, help="Round values through float32 like the DAZ channel reads")
    ap.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    ap.add_argument("--pause", action="store_true", default=None, help="Wait for Enter before exiting (drag-and-drop use)")
    return ap


def config_from_args(args) -> ExportConfig:
    config = load_config(args.config) if args.config else ExportConfig()
    log_level = "DEBUG" if args.verbose else "WARNING" if args.quiet else None
    return config.merged(
        output_dir=args.output_dir,
        indent=args.indent,
        single_precision=args.single_precision,
        log_file=args.log_file,
        log_level=log_level,
        pause=args.pause,
    )


def export_morph_data(duf_path, config: ExportConfig):
    """Run the whole export for one .duf file; return the written paths. Raises MorphExportError."""
    document = parse_dson(read_duf_text(duf_path))

    unresolved = []

    def report_unresolved(warning):
        unresolved.append(warning)
        logger.warning(str(warning))

    figure_morphs = resolve_morphs(document, on_unresolved=report_unresolved)
    if not figure_morphs:
        logger.warning("No figures found in %s", duf_path)
    if unresolved:
        logger.warning("Skipped %d modifiers with unknown parents", len(unresolved))

    output_dir = config.resolve_output_dir(duf_path)
    return write_all_morph_data(
        output_dir,
        figure_morphs,
        indent=config.indent,
        single_precision=config.single_precision,
    )


def _wait_for_enter():
    try:
        input("Press Enter to exit...")
    except EOFError:
        pass


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.duf is None:
        print(USAGE_PROMPT)
        ap.print_usage()
        return 2

    try:
        config = config_from_args(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    try:
        setup_logging(config.log_level_value, str(config.log_file) if config.log_file else None)
    except OSError as e:
        print(f"Error: cannot open log file {config.log_file}: {e}", file=sys.stderr)
        return 1

    status = 0
    try:
        paths = export_morph_data(args.duf, config)
    except MorphExportError as e:
        logger.error("Error exporting morph data from %s: %s", args.duf, e)
        status = 1
    else:
        print()
        for path in paths:
            print("Created morph data file:", path)

    print("\n" + DONE_MESSAGE)
    if config.pause:
        _wait_for_enter()
    return status


if __name__ == "__main__":
    raise SystemExit(main())
