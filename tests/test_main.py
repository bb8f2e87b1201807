import json

import pytest

from hexworld import config as hexconfig
from hexworld.main import build_config, main, parse_args


@pytest.fixture
def quiet_logging(monkeypatch):
    """Keep the CLI from reconfiguring the root logger during tests."""
    calls = []

    def fake_setup(**kwargs):
        calls.append(kwargs)
        return hexconfig.get_logger()

    monkeypatch.setattr(hexconfig, "setup_logging", fake_setup)
    return calls


def test_build_config_from_flags():
    config = build_config(parse_args(["--seed", "42", "--radius", "6", "--road-method", "organic"]))
    assert config.seed == 42
    assert config.map_radius == 6
    assert config.road_method == "organic"


def test_flags_override_config_file(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps({"map_radius": 9, "city_size": 2, "seed": 1}), encoding="utf-8")
    config = build_config(parse_args(["--config", str(path), "--seed", "5"]))
    assert config.map_radius == 9
    assert config.city_size == 2
    assert config.seed == 5


def test_config_file_seed_kept_without_flag(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps({"seed": 77, "map_radius": 9}), encoding="utf-8")
    config = build_config(parse_args(["--config", str(path)]))
    assert config.seed == 77
    assert config.map_radius == 9


def test_seed_defaults_to_zero():
    assert build_config(parse_args([])).seed == 0


def test_main_prints_preview(capsys, quiet_logging):
    assert main(["--seed", "3", "--radius", "4", "--preview", "--no-log-files"]) == 0
    assert quiet_logging == [{"level": "INFO", "write_files": False}]
    out = capsys.readouterr().out
    assert len(out.strip("\n").splitlines()) == 9


def test_setup_logging_writes_log_file(tmp_path):
    import logging

    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        hexconfig.setup_logging(tmp_path, level=logging.INFO)
        assert len(list((tmp_path / "log_dump").glob("hexworld_*.log"))) == 1
        assert (tmp_path / "old_log_dump").is_dir()
    finally:
        for handler in root.handlers[:]:
            if handler not in saved[0]:
                handler.close()
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
