from __future__ import annotations

from pathlib import Path

import pytest

from modgate.config import ConfigManager, load_yaml
from modgate.schemas import load_config


def test_config_manager_loads_named_yaml(tmp_path: Path):
    (tmp_path / "plugins.yaml").write_text(
        "discovery:\n  directories: [plugins]\ncriteria:\n  required_attributes: [activate]\n",
        encoding="utf-8",
    )

    raw = ConfigManager(tmp_path).load("plugins")
    config = load_config(raw)

    assert config.discovery.directories == ["plugins"]
    assert config.criteria.required_attributes == ["activate"]


def test_load_yaml_empty_file_is_empty_mapping(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_yaml(path) == {}


def test_load_yaml_rejects_non_mapping(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_yaml(path)


def test_load_yaml_rejects_malformed_yaml(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("criteria: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid YAML"):
        load_yaml(path)
