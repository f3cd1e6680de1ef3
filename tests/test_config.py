from pathlib import Path

import pytest

from cache.config import CacheConfig, load_config
from linalg.invert import DEFAULT_TOL

DEFAULTS_PATH = Path(__file__).parent.parent / "config" / "cache.defaults.yml"


def test_load_config_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("log_level: debug", encoding="utf-8")

    cfg = load_config(path)

    assert isinstance(cfg, CacheConfig)
    assert cfg.log_level == "DEBUG"
    assert cfg.tolerance == DEFAULT_TOL
    assert cfg.log_file is None


def test_shipped_defaults_file():
    cfg = load_config(DEFAULTS_PATH)

    assert cfg.tolerance == DEFAULT_TOL
    assert cfg.log_level == "INFO"
    assert cfg.solve_kwargs() == {"tol": DEFAULT_TOL}


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == CacheConfig()


def test_env_overrides(monkeypatch, tmp_path):
    source = tmp_path / "config.yml"
    source.write_text("tolerance: 1.0e-10", encoding="utf-8")

    monkeypatch.setenv("MATRIX_CACHE_TOL", "1e-8")
    monkeypatch.setenv("MATRIX_CACHE_LOG_LEVEL", "warning")
    monkeypatch.setenv("MATRIX_CACHE_LOG_FILE", str(tmp_path / "cache.log"))

    cfg = load_config(source)

    assert cfg.tolerance == 1e-8
    assert cfg.log_level == "WARNING"
    assert cfg.log_file == tmp_path / "cache.log"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


def test_schema_rejects_unknown_keys(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("cache_size: 10", encoding="utf-8")

    with pytest.raises(ValueError, match="validation failed"):
        load_config(path)


def test_schema_rejects_non_positive_tolerance(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("tolerance: 0", encoding="utf-8")

    with pytest.raises(ValueError, match="validation failed"):
        load_config(path)


def test_solve_kwargs_feed_cache_solve(tmp_path):
    from cache.fetch import cache_solve, make_cache_matrix
    from linalg.invert import ComputeError

    path = tmp_path / "config.yml"
    path.write_text("tolerance: 1.0e-6", encoding="utf-8")
    cfg = load_config(path)

    cm = make_cache_matrix([[1.0, 1.0], [1.0, 1.0 + 1e-10]])
    with pytest.raises(ComputeError):
        cache_solve(cm, **cfg.solve_kwargs())


def test_exponent_without_dot_tolerance(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("tolerance: 1e-8", encoding="utf-8")

    cfg = load_config(path)

    assert cfg.tolerance == 1e-8


def test_non_numeric_tolerance_string_rejected(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("tolerance: tight", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)
