# -*- coding: utf-8 -*-
import gzip
import json
import logging

import pytest


def figure_node(node_id, name=None, geometry_ids=()):
    return {
        "id": node_id,
        "name": name or node_id,
        "preview": {"type": "figure"},
        "geometries": [{"id": g} for g in geometry_ids],
    }


def modifier(mod_id, parent, url=None, value=None):
    m = {"id": mod_id, "parent": parent, "url": url if url is not None else f"/data/morphs/{mod_id}.dsf#{mod_id}"}
    if value is not None:
        m["channel"] = {"id": "value", "type": "float", "current_value": value}
    return m


def scene(nodes=(), modifiers=()):
    return {"file_version": "0.6.0.0", "scene": {"nodes": list(nodes), "modifiers": list(modifiers)}}


@pytest.fixture
def basic_scene():
    """One figure '1' owning geometry '2'; one morph on the figure, one valueless modifier on the geometry."""
    return scene(
        nodes=[figure_node("1", name="Genesis 8 Female", geometry_ids=["2"])],
        modifiers=[
            modifier("FBMHeavy", "#1", url="/data/DAZ%203D/Genesis%208/Female/Morphs/FBM%20Heavy%28v2%29.dsf#FBMHeavy", value=0.5),
            modifier("SkinBinding", "#2"),
        ],
    )


@pytest.fixture
def write_duf(tmp_path):
    """Write a document (dict or str) as a gzip-compressed .duf and return its path."""

    def _write(document, name="scene.duf"):
        text = document if isinstance(document, str) else json.dumps(document)
        path = tmp_path / name
        path.write_bytes(gzip.compress(text.encode("utf-8")))
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """main() attaches handlers to the package logger; drop them between tests."""
    yield
    logger = logging.getLogger("duf_morph_export")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
