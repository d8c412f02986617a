import json

import pytest

import config
from geometry import NotPowerOfTwoError, OutOfRangeError


def write(path, text):
    path.write_text(text)
    return path


def test_read_legacy_config(tmp_path):
    path = write(tmp_path / "trace.config", "Number of sets: 16\nSet size: 2\nLine size: 32\n")
    g = config.read_geometry(path)
    assert tuple(g) == (16, 2, 32)


def test_legacy_config_bad_format(tmp_path):
    path = write(tmp_path / "trace.config", "sets=16\nways=2\nline=32\n")
    with pytest.raises(config.ConfigFormatError):
        config.read_geometry(path)


def test_legacy_config_invalid_geometry(tmp_path):
    path = write(tmp_path / "trace.config", "Number of sets: 12\nSet size: 2\nLine size: 32\n")
    with pytest.raises(NotPowerOfTwoError):
        config.read_geometry(path)


def test_legacy_config_zero_sets(tmp_path):
    path = write(tmp_path / "trace.config", "Number of sets: 0\nSet size: 2\nLine size: 32\n")
    with pytest.raises(OutOfRangeError):
        config.read_geometry(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        config.read_geometry(tmp_path / "nope.config")


def test_read_json_config(tmp_path):
    cfg = {"cache": {"num_sets": 64, "associativity": 4, "line_size": 64}}
    path = write(tmp_path / "cfg.json", json.dumps(cfg))
    assert tuple(config.read_geometry(str(path))) == (64, 4, 64)


def test_json_config_missing_key():
    with pytest.raises(config.ConfigFormatError):
        config.geometry_from_dict({"cache": {"num_sets": 64, "associativity": 4}})
    with pytest.raises(config.ConfigFormatError):
        config.geometry_from_dict({})


def test_section_defaults():
    out = config.output_settings({})
    assert out["results_dir"] == "results"
    wl = config.workload_settings({"workload": {"pattern": "random", "random_seed": 7}})
    assert wl["pattern"] == "random"
    assert wl["seed"] == 7
    assert wl["read_ratio"] == 0.8


def test_json_config_must_be_object(tmp_path):
    path = write(tmp_path / "cfg.json", "[1, 2, 3]")
    with pytest.raises(config.ConfigFormatError):
        config.load_config(str(path))
    with pytest.raises(config.ConfigFormatError):
        config.geometry_from_dict([1, 2, 3])
