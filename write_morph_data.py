# -*- coding: utf-8 -*-
"""
Write resolved morphs to one JSON file per figure: <output_dir>/morphdata_<figureId>.json
Each file is a JSON array of {"id", "url", "value"} in modifier order. Existing files are overwritten.

Files are first written next to their targets as <name>.tmp and only moved into place once every
figure has been written, so a failed write leaves the output directory as it was.
"""
import json
import os
from pathlib import Path
from typing import Dict, Iterable, List

import numpy as np

from logging_config import get_logger
from morph_export_errors import DataError, FileAccessError, MorphExportError
from resolve_morphs import REF_MARKER, MorphRecord

logger = get_logger(__name__)

FILE_PREFIX = "morphdata_"
STAGING_SUFFIX = ".tmp"


def morph_data_path(output_dir, figure_key: str) -> Path:
    figure_id = figure_key[len(REF_MARKER):] if figure_key.startswith(REF_MARKER) else figure_key
    return Path(output_dir) / f"{FILE_PREFIX}{figure_id}.json"


def staging_path(path: Path) -> Path:
    return path.with_name(path.name + STAGING_SUFFIX)


def to_single_precision(value: float) -> float:
    """Round through float32: 0.3 -> 0.30000001192092896."""
    return float(np.float32(value))


def records_to_list(records: Iterable[MorphRecord], single_precision: bool = False) -> List[dict]:
    out = []
    for record in records:
        d = record.to_dict()
        if single_precision:
            d["value"] = to_single_precision(d["value"])
        out.append(d)
    return out


def _dump_json(path: Path, data: List[dict], indent: int) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise DataError(f"Cannot write {path.name}: {e}") from e
    except OSError as e:
        raise FileAccessError(f"Cannot write {path}: {e}") from e


def _discard(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.is_file():
            path.unlink()


def write_all_morph_data(output_dir, figure_morphs: Dict[str, List[MorphRecord]], indent: int = 2, single_precision: bool = False) -> List[Path]:
    """
    Write every figure (including ones with no morphs); return paths in figure order.
    Nothing is moved into place unless all figures were written.
    """
    staged = []
    try:
        for key, records in figure_morphs.items():
            path = morph_data_path(output_dir, key)
            staged.append((staging_path(path), path))
            data = records_to_list(records, single_precision=single_precision)
            _dump_json(staged[-1][0], data, indent)
            logger.debug("Wrote %d morphs for %s", len(data), key)
    except MorphExportError:
        _discard(tmp for tmp, _ in staged)
        raise

    for tmp, path in staged:
        try:
            os.replace(tmp, path)
        except OSError as e:
            raise FileAccessError(f"Cannot move {tmp} to {path}: {e}") from e
    return [path for _, path in staged]


def write_morph_data(output_dir, figure_key: str, records: Iterable[MorphRecord], indent: int = 2, single_precision: bool = False) -> Path:
    return write_all_morph_data(output_dir, {figure_key: list(records)}, indent=indent, single_precision=single_precision)[0]
