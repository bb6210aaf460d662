# -*- coding: utf-8 -*-
"""
Pair the morphs of a DSON scene with the figures they belong to.

Pass 1 walks scene.nodes: every node with preview.type == "figure" is registered as "#<id>",
and each of its geometries as "#<geometry id>" -> "#<figure id>" (modifiers may name a geometry
as their parent instead of the figure).
Pass 2 walks scene.modifiers in order, resolves each parent to a figure (directly or through a
geometry) and keeps the ones that carry a scalar channel.current_value.

Standalone: print the resolved morphs as JSON without writing per-figure files.
  python resolve_morphs.py scene.duf
"""
import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from dson_document import DsonNode, parse_dson
from logging_config import get_logger
from morph_export_errors import DataError, MorphExportError, ResolutionWarning

logger = get_logger(__name__)

FIGURE_TYPE = "figure"
REF_MARKER = "#"

# Only these escapes are decoded; the rest of the url stays as written in the file
URL_ESCAPES = (("%20", " "), ("%28", "("), ("%29", ")"))


@dataclass(frozen=True)
class MorphRecord:
    id: str
    url: str
    value: float

    def to_dict(self) -> dict:
        return {"id": self.id, "url": self.url, "value": self.value}


def ref_key(node_id: str) -> str:
    return REF_MARKER + node_id


def decode_morph_url(url: str) -> str:
    """'/data/a%20b/Shape%28v2%29.dsf#morph' -> '/data/a b/Shape(v2).dsf'"""
    for escape, char in URL_ESCAPES:
        url = url.replace(escape, char)
    return url.split(REF_MARKER, 1)[0]


def _log_unresolved(warning: ResolutionWarning) -> None:
    logger.warning(str(warning))


def _require_string(node: DsonNode, path: str, what: str) -> str:
    value = node.get_string(path)
    if value is None:
        raise DataError(f"{what} has no '{path}'")
    return value


def find_figures(document: DsonNode):
    """
    Pass 1. Returns (figures, geometry_owner):
      figures: "#<figure id>" -> figure node, in document order
      geometry_owner: "#<geometry id>" -> "#<figure id>"
    """
    figures: Dict[str, DsonNode] = {}
    geometry_owner: Dict[str, str] = {}
    for node in document.get_children("scene.nodes"):
        if node.get_raw("preview.type") != FIGURE_TYPE:
            continue
        figure_id = _require_string(node, "id", "Figure node")
        figure_key = ref_key(figure_id)
        if figure_key in figures:
            raise DataError(f"Duplicate figure id '{figure_id}'")
        figures[figure_key] = node
        logger.info("Found figure: %s", node.get_raw("name"))

        geometries = node.get_children("geometries")
        logger.info("Found %d geometries for figure '%s'", len(geometries), figure_id)
        for geometry in geometries:
            geometry_key = ref_key(_require_string(geometry, "id", f"Geometry of figure '{figure_id}'"))
            if geometry_key in geometry_owner:
                raise DataError(
                    f"Geometry '{geometry_key}' of figure '{figure_id}' is already owned by "
                    f"'{geometry_owner[geometry_key]}'"
                )
            geometry_owner[geometry_key] = figure_key
    return figures, geometry_owner


def read_morph(modifier: DsonNode) -> Optional[MorphRecord]:
    """MorphRecord for a modifier with a scalar channel.current_value, else None (not a morph)."""
    if not modifier.has("channel.current_value"):
        return None
    raw_value = modifier.get_raw("channel.current_value")
    if isinstance(raw_value, (list, dict)):
        logger.debug("Modifier '%s' has a non-scalar value, skipping", modifier.get_raw("id"))
        return None
    morph_id = _require_string(modifier, "id", "Morph modifier")
    url = _require_string(modifier, "url", f"Morph '{morph_id}'")
    if isinstance(raw_value, bool):
        # on/off channels export as 1.0 / 0.0
        value = float(raw_value)
    else:
        value = modifier.get_float("channel.current_value")
    return MorphRecord(id=morph_id, url=decode_morph_url(url), value=value)


def resolve_morphs(
    document: DsonNode,
    on_unresolved: Optional[Callable[[ResolutionWarning], None]] = None,
) -> Dict[str, List[MorphRecord]]:
    """
    Map every figure key ("#<id>") to its morphs in scene.modifiers order.
    Figures without morphs map to []. Modifiers whose parent cannot be resolved are reported
    through on_unresolved (default: logged as a warning) and skipped.
    """
    if on_unresolved is None:
        on_unresolved = _log_unresolved

    figures, geometry_owner = find_figures(document)
    figure_morphs: Dict[str, List[MorphRecord]] = {key: [] for key in figures}

    for modifier in document.get_children("scene.modifiers"):
        parent = modifier.get_raw("parent")
        if not isinstance(parent, str):
            # true / 3 / {...} can never name a figure or geometry
            on_unresolved(ResolutionWarning(modifier.get_raw("id"), parent))
            continue
        if parent not in figures:
            owner = geometry_owner.get(parent)
            if owner is None:
                on_unresolved(ResolutionWarning(modifier.get_raw("id"), parent))
                continue
            parent = owner

        morph = read_morph(modifier)
        if morph is None:
            continue
        logger.info("Found morph for figure '%s': %s", figures[parent].get_raw("name"), morph.id)
        figure_morphs[parent].append(morph)

    return figure_morphs


def morphs_to_json(figure_morphs: Dict[str, List[MorphRecord]]) -> dict:
    return {key: [m.to_dict() for m in morphs] for key, morphs in figure_morphs.items()}


def main(argv=None):
    from read_duf_file import read_duf_text

    ap = argparse.ArgumentParser(description="Resolve morphs per figure from a .duf file and print them")
    ap.add_argument("duf", type=Path, help="Path to .duf scene file")
    args = ap.parse_args(argv)

    try:
        figure_morphs = resolve_morphs(parse_dson(read_duf_text(args.duf)))
    except MorphExportError as e:
        raise SystemExit(f"Error: {e}")
    print(json.dumps(morphs_to_json(figure_morphs), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
