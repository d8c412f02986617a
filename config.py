# config.py
import json
import re

import geometry

DEFAULT_CONFIG_PATH = "trace.config"

_LEGACY_PATTERN = re.compile(
    r"\s*Number of sets:\s*(-?\d+)\s*\n"
    r"\s*Set size:\s*(-?\d+)\s*\n"
    r"\s*Line size:\s*(-?\d+)",
)


class ConfigFormatError(ValueError):
    pass


def load_config(path):
    with open(path, "r") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ConfigFormatError(f"{path}: top level must be a JSON object")
    return cfg


def parse_legacy_config(text):
    """
    Parse the three-line text format:
        Number of sets: 16
        Set size: 2
        Line size: 16
    Returns (num_sets, associativity, line_size).
    """
    m = _LEGACY_PATTERN.match(text)
    if not m:
        raise ConfigFormatError("Invalid trace.config format")
    return tuple(int(g) for g in m.groups())


def geometry_from_dict(cfg):
    if not isinstance(cfg, dict):
        raise ConfigFormatError("config must be a mapping")
    cache_cfg = cfg.get("cache")
    if not isinstance(cache_cfg, dict):
        raise ConfigFormatError("config has no 'cache' section")
    try:
        dims = (cache_cfg["num_sets"], cache_cfg["associativity"], cache_cfg["line_size"])
    except KeyError as exc:
        raise ConfigFormatError(f"'cache' section is missing {exc.args[0]!r}") from None
    return geometry.validate(*dims)


def read_geometry(path=DEFAULT_CONFIG_PATH):
    """Load and validate the cache geometry from a JSON or legacy text config file."""
    if str(path).endswith(".json"):
        return geometry_from_dict(load_config(path))
    with open(path, "r") as f:
        text = f.read()
    return geometry.validate(*parse_legacy_config(text))


def output_settings(cfg):
    out_cfg = cfg.get("output", {})
    return {
        "results_dir": out_cfg.get("results_dir", "results"),
        "hitmiss_plot": out_cfg.get("hitmiss_plot", "results/hit_miss_rate.png"),
        "sets_plot": out_cfg.get("sets_plot", "results/set_usage.png"),
    }


def workload_settings(cfg):
    wl_cfg = cfg.get("workload", {})
    return {
        "num_accesses": wl_cfg.get("num_accesses", 10000),
        "pattern": wl_cfg.get("pattern", "mixed"),
        "read_ratio": wl_cfg.get("read_ratio", 0.8),
        "working_set_bytes": wl_cfg.get("working_set_bytes", 64 * 1024),
        "access_size": wl_cfg.get("access_size", 4),
        "seed": wl_cfg.get("random_seed", None),
    }
