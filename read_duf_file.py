# -*- coding: utf-8 -*-
"""
Read a DAZ Studio .duf file and return its DSON text.

.duf files are gzip-compressed DSON (DAZ Scene Object Notation), which is JSON-shaped,
so once decompressed the text can be parsed like any JSON document (see dson_document.py).

Standalone: dump the decompressed DSON for inspection.
  python read_duf_file.py scene.duf -o scene.dson
"""
import argparse
import gzip
import zlib
from pathlib import Path

from logging_config import get_logger
from morph_export_errors import DecompressionError, EncodingError, FileAccessError, FormatError

logger = get_logger(__name__)

DUF_EXTENSION = ".duf"
GZIP_MAGIC = b"\x1f\x8b"


def is_duf_path(path) -> bool:
    """Extension check only; case-insensitive (Windows exports may write .DUF)."""
    return Path(path).suffix.lower() == DUF_EXTENSION


def decompress_duf(data: bytes) -> bytes:
    """Gunzip the whole .duf byte stream. Concatenated gzip members are joined."""
    if not data.startswith(GZIP_MAGIC):
        raise DecompressionError("Stream is not gzip-compressed (missing gzip header)")
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionError(f"Corrupt gzip stream: {e}") from e


def decode_dson(raw: bytes) -> str:
    """UTF-8 decode; a leading BOM is dropped."""
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise EncodingError(f"Decompressed data is not UTF-8 text: {e}") from e


def read_duf_bytes(path) -> bytes:
    path = Path(path)
    if not is_duf_path(path):
        raise FormatError(f"File format is not {DUF_EXTENSION}: {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileAccessError(f"Cannot read {path}: {e}") from e


def read_duf_text(path) -> str:
    """Return the decompressed DSON text of a .duf file."""
    logger.info("Parsing .duf file: %s", path)
    data = read_duf_bytes(path)
    text = decode_dson(decompress_duf(data))
    logger.debug("Decompressed %d bytes to %d characters", len(data), len(text))
    return text


def main(argv=None):
    ap = argparse.ArgumentParser(description="Decompress a DAZ .duf file and dump its DSON text")
    ap.add_argument("duf", type=Path, help="Path to .duf scene file")
    ap.add_argument("-o", "--output", type=Path, default=None, help="Output DSON path (default: stdout)")
    args = ap.parse_args(argv)

    try:
        text = read_duf_text(args.duf)
    except (FormatError, FileAccessError, DecompressionError, EncodingError) as e:
        raise SystemExit(f"Error reading .duf file: {e}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print("Wrote:", args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
