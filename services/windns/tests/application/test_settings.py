from pathlib import Path

from windns.application.settings import (
    CONFIG_ENV,
    Settings,
    find_settings_path,
    load_settings,
    merge_overrides,
)


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    result = load_settings()
    assert result.value == Settings()


def test_loads_yaml_file(tmp_path):
    path = tmp_path / "windns.yaml"
    path.write_text(
        "netsh_path: D:\\tools\\netsh.exe\n"
        "timeout_ms: 5000\n"
        "terminate_on_timeout: true\n"
        "output_encoding: cp437\n"
    )
    result = load_settings(path)
    assert result.value == Settings(
        netsh_path=Path("D:\\tools\\netsh.exe"),
        timeout_ms=5000,
        terminate_on_timeout=True,
        output_encoding="cp437",
    )


def test_env_var_selects_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("timeout_ms: 100\n")
    monkeypatch.setenv(CONFIG_ENV, str(path))
    assert find_settings_path() == path
    assert load_settings().value == Settings(timeout_ms=100)


def test_cwd_file_is_found(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    (tmp_path / "windns.yaml").write_text("timeout_ms: 250\n")
    assert load_settings().value == Settings(timeout_ms=250)


def test_schema_violation_is_reported(tmp_path):
    path = tmp_path / "windns.yaml"
    path.write_text("timeout_ms: -1\nbogus: 1\n")
    result = load_settings(path)
    assert result.value is None
    assert {d.code for d in result.diagnostics} == {"SETTINGS_SCHEMA_INVALID"}
    assert result.exit_code == 2


def test_missing_explicit_file_is_reported(tmp_path):
    result = load_settings(tmp_path / "absent.yaml")
    assert result.value is None
    assert result.diagnostics[0].code == "SETTINGS_PARSE_FAILED"


def test_non_mapping_is_reported(tmp_path):
    path = tmp_path / "windns.yaml"
    path.write_text("- 1\n- 2\n")
    result = load_settings(path)
    assert result.diagnostics[0].code == "SETTINGS_PARSE_FAILED"


def test_overrides_win_over_file():
    settings = Settings(timeout_ms=5000)
    merged = merge_overrides(settings, timeout_ms=0, netsh_path=Path("netsh.exe"))
    assert merged.timeout_ms == 0
    assert merged.netsh_path == Path("netsh.exe")
    assert merge_overrides(settings) == settings


def test_float_timeout_is_accepted(tmp_path):
    path = tmp_path / "windns.yaml"
    path.write_text("timeout_ms: 1500.0\n")
    result = load_settings(path)
    assert result.value == Settings(timeout_ms=1500)


def test_unknown_output_encoding_is_reported(tmp_path):
    path = tmp_path / "windns.yaml"
    path.write_text("output_encoding: no-such-codec\n")
    result = load_settings(path)
    assert result.value is None
    assert [d.code for d in result.diagnostics] == ["SETTINGS_SCHEMA_INVALID"]
    assert "no-such-codec" in result.diagnostics[0].message


def test_terminate_override():
    merged = merge_overrides(Settings(), terminate_on_timeout=True)
    assert merged.terminate_on_timeout
