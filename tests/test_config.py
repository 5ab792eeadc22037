"""Tests for configuration loading."""

from pathlib import Path

import pytest

from goimpact.core.config import ImpactConfig
from goimpact.core.exceptions import ConfigError


def test_defaults():
    config = ImpactConfig()
    assert config.manifest_file == "go.mod"
    assert config.lock_file == "go.sum"
    assert config.ambiguous_prefix == "error"
    assert config.is_source_file("pkg/x/x.go")
    assert not config.is_source_file("pkg/x/README.md")


def test_missing_file_gives_defaults(tmp_path: Path):
    assert ImpactConfig.load(tmp_path / "nope.yaml") == ImpactConfig()


def test_load_yaml(tmp_path: Path):
    path = tmp_path / ".goimpact.yaml"
    path.write_text("ambiguous_prefix: first\nconstraint_directives:\n  - '// +build'\n")
    config = ImpactConfig.load(path)
    assert config.ambiguous_prefix == "first"
    assert config.constraint_directives == ["// +build"]
    assert config.lock_file == "go.sum"


def test_discover(tmp_path: Path):
    (tmp_path / ".goimpact.yaml").write_text("match_module_subpackages: false\n")
    assert ImpactConfig.discover(tmp_path).match_module_subpackages is False


def test_save_round_trip(tmp_path: Path):
    path = tmp_path / "nested" / "config.yaml"
    config = ImpactConfig(lock_file="deps.lock")
    config.save(path)
    assert ImpactConfig.load(path) == config


@pytest.mark.parametrize(
    "content",
    [
        "ambiguous_prefix: sometimes\n",
        "source_extensions: [unclosed\n",
    ],
)
def test_invalid_config(tmp_path: Path, content: str):
    path = tmp_path / ".goimpact.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        ImpactConfig.load(path)
