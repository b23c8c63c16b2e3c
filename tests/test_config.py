import pytest
from pydantic import ValidationError

from plumbline.config import RunnerConfig, load_config


def test_defaults():
    config = RunnerConfig()
    assert config.color is True
    assert config.precision == 4
    assert config.output_dir == "runs"
    assert config.report is True


def test_load_config(tmp_path):
    path = tmp_path / "plumbline.yaml"
    path.write_text("color: false\nprecision: 2\nreport: false\n")
    config = load_config(path)
    assert config.color is False
    assert config.precision == 2
    assert config.report is False


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "plumbline.yaml"
    path.write_text("")
    config = load_config(path)
    assert config.precision == 4


def test_relative_output_dir_resolved_against_config(tmp_path):
    sub = tmp_path / "project"
    sub.mkdir()
    path = sub / "plumbline.yaml"
    path.write_text("output_dir: results\n")
    config = load_config(path)
    assert config.output_dir == str((sub / "results").resolve())


def test_absolute_output_dir_kept(tmp_path):
    target = tmp_path / "abs"
    path = tmp_path / "plumbline.yaml"
    path.write_text(f"output_dir: {target}\n")
    assert load_config(path).output_dir == str(target)


def test_env_vars_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("PLUMBLINE_TEST_DIR", "from-env")
    path = tmp_path / "plumbline.yaml"
    path.write_text("output_dir: ${PLUMBLINE_TEST_DIR}\n")
    assert load_config(path).output_dir.endswith("from-env")


def test_env_var_default_used(tmp_path, monkeypatch):
    monkeypatch.delenv("PLUMBLINE_UNSET_DIR", raising=False)
    path = tmp_path / "plumbline.yaml"
    path.write_text("output_dir: ${PLUMBLINE_UNSET_DIR:-fallback}\n")
    assert load_config(path).output_dir.endswith("fallback")


def test_missing_env_var_raises(tmp_path, monkeypatch):
    monkeypatch.delenv("PLUMBLINE_UNSET_DIR", raising=False)
    path = tmp_path / "plumbline.yaml"
    path.write_text("output_dir: ${PLUMBLINE_UNSET_DIR}\n")
    with pytest.raises(ValueError, match="PLUMBLINE_UNSET_DIR"):
        load_config(path)


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "plumbline.yaml"
    path.write_text("colour: true\n")
    with pytest.raises(ValidationError):
        load_config(path)


def test_precision_bounds():
    with pytest.raises(ValidationError):
        RunnerConfig(precision=-1)
    with pytest.raises(ValidationError):
        RunnerConfig(precision=11)


def test_blank_output_dir_rejected():
    with pytest.raises(ValidationError):
        RunnerConfig(output_dir="  ")


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "plumbline.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)
