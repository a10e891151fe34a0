from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from cli.ui_components import build_console_hooks
from core.services.orchestrator import Orchestrator
from fakes import TEST_URL, RecordingConnector, RecordingRunner

runner = CliRunner()


@pytest.fixture
def wiring(monkeypatch, tmp_path):
    """Swap the production adapters for recording fakes."""
    monkeypatch.chdir(tmp_path)
    for var in ("DATABASE_URL", "DB_OPS_RECREATE_SCRIPT", "DB_OPS_SEED_FILE", "DB_OPS_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    state = SimpleNamespace(connector=RecordingConnector(), runner=RecordingRunner(), targets=[])

    def fake_build(target, settings):
        state.targets.append(target)
        return Orchestrator(
            target,
            state.connector,
            state.runner,
            script_path=settings.recreate_script,
            hooks=build_console_hooks(cli_main._console),
        )

    monkeypatch.setattr(cli_main, "build_orchestrator", fake_build)
    return state


def _write_script(tmp_path):
    script = tmp_path / "db_recreate.sh"
    script.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    return script


@pytest.mark.parametrize("args", [["status"], ["recreate"], ["seed"], ["reset"]])
def test_missing_url_fails_before_any_work(wiring, tmp_path, args):
    """No --url and no DATABASE_URL is a configuration error for every command"""
    _write_script(tmp_path)
    (tmp_path / "insert_data.sql").write_text("SELECT 1;", encoding="utf-8")

    result = runner.invoke(cli_main.app, args)

    assert result.exit_code == 1
    assert "Missing required configuration" in result.output
    assert wiring.targets == []
    assert wiring.connector.connect_attempts == []
    assert wiring.runner.calls == []


def test_blank_url_is_missing(wiring):
    result = runner.invoke(cli_main.app, ["status"], env={"DATABASE_URL": "   "})

    assert result.exit_code == 1
    assert "Missing required configuration" in result.output


def test_status_with_flag(wiring):
    result = runner.invoke(cli_main.app, ["--url", TEST_URL, "status"])

    assert result.exit_code == 0
    assert "Connection successful" in result.output
    assert wiring.targets[0].url == TEST_URL


def test_url_from_environment(wiring):
    result = runner.invoke(cli_main.app, ["status"], env={"DATABASE_URL": TEST_URL})

    assert result.exit_code == 0
    assert wiring.connector.connect_attempts[0].url == TEST_URL


def test_status_connection_failure_exits_nonzero(wiring):
    wiring.connector.fail_connect = True

    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "status"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Failed to establish connection" in result.output


def test_seed_uses_default_file(wiring, tmp_path):
    (tmp_path / "insert_data.sql").write_text("INSERT INTO t(v) VALUES (1);", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "seed"])

    assert result.exit_code == 0
    assert wiring.connector.executed == ["INSERT INTO t(v) VALUES (1);"]
    assert "Seeding completed." in result.output


def test_seed_default_file_from_settings(wiring, tmp_path):
    (tmp_path / "other.sql").write_text("SELECT 2;", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "seed"], env={"DB_OPS_SEED_FILE": "other.sql"})

    assert result.exit_code == 0
    assert wiring.connector.executed == ["SELECT 2;"]


def test_seed_missing_file(wiring):
    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "seed", "--file", "nope.sql"])

    assert result.exit_code == 1
    assert "Failed to read SQL file" in result.output
    assert wiring.connector.connect_attempts == []


def test_recreate_missing_script(wiring):
    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "recreate"])

    assert result.exit_code == 1
    assert "not found" in result.output
    assert wiring.runner.calls == []


def test_recreate_failing_script(wiring, tmp_path):
    _write_script(tmp_path)
    wiring.runner.exit_code = 1

    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "recreate"])

    assert result.exit_code == 1
    assert "exited with error code: 1" in result.output


def test_reset_prints_both_steps_in_order(wiring, tmp_path):
    """reset runs the script with the URL, then seeds the given file"""
    _write_script(tmp_path)
    (tmp_path / "data.sql").write_text("INSERT INTO t(v) VALUES (1);", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "reset", "-f", "data.sql"])

    assert result.exit_code == 0
    assert [argument for _, argument in wiring.runner.calls] == [TEST_URL]
    assert wiring.connector.executed == ["INSERT INTO t(v) VALUES (1);"]
    output = result.output
    assert output.index("Database recreated successfully.") < output.index("Seeding completed.")


def test_reset_stops_when_recreate_fails(wiring, tmp_path):
    (tmp_path / "insert_data.sql").write_text("SELECT 1;", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "reset"])

    assert result.exit_code == 1
    assert "Seeding" not in result.output
    assert wiring.connector.connect_attempts == []


def test_invalid_log_level_is_configuration_error(wiring):
    result = runner.invoke(cli_main.app, ["-u", TEST_URL, "status"], env={"DB_OPS_LOG_LEVEL": "chatty"})

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert wiring.targets == []
