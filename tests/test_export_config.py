# -*- coding: utf-8 -*-
import json
import logging
from pathlib import Path

import pytest

from export_config import ExportConfig, load_config
from morph_export_errors import ConfigError


def write_config(tmp_path, data):
    path = tmp_path / "export_config.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


def test_defaults(tmp_path):
    config = ExportConfig()
    assert config.indent == 2
    assert config.single_precision is False
    assert config.log_level_value == logging.INFO
    assert config.resolve_output_dir(tmp_path / "scene.duf") == tmp_path.resolve()


def test_load_all_keys(tmp_path):
    config = load_config(write_config(tmp_path, {
        "output_dir": "morphs",
        "indent": 4,
        "single_precision": True,
        "log_file": "export.log",
        "log_level": "debug",
        "pause": True,
    }))
    assert config.output_dir == Path("morphs")
    assert config.indent == 4
    assert config.single_precision is True
    assert config.log_file == Path("export.log")
    assert config.log_level == "DEBUG"
    assert config.pause is True
    assert config.resolve_output_dir("elsewhere/scene.duf") == Path("morphs")


def test_partial_config_keeps_defaults(tmp_path):
    config = load_config(write_config(tmp_path, {"indent": 0}))
    assert config.indent == 0
    assert config.output_dir is None


def test_merged_ignores_none():
    config = ExportConfig(indent=4, single_precision=True).merged(indent=None, single_precision=None, pause=True)
    assert config.indent == 4
    assert config.single_precision is True
    assert config.pause is True


@pytest.mark.parametrize("data", [
    {"colour": "red"},
    {"indent": "2"},
    {"indent": -1},
    {"indent": True},
    {"single_precision": "yes"},
    {"log_level": "LOUD"},
    {"output_dir": 3},
    [1, 2],
    "{not json",
])
def test_invalid_config(tmp_path, data):
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, data))


def test_missing_config(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")
