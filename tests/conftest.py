import pytest

from core.domain.models import ConnectionTarget
from core.services.orchestrator import Orchestrator, OrchestratorHooks
from fakes import TEST_URL, RecordingConnector, RecordingRunner


@pytest.fixture
def target():
    return ConnectionTarget(url=TEST_URL)


@pytest.fixture
def connector():
    return RecordingConnector()


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def script(tmp_path):
    path = tmp_path / "db_recreate.sh"
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "insert_data.sql"
    path.write_text("INSERT INTO t(v) VALUES (1);", encoding="utf-8")
    return path


@pytest.fixture
def events():
    return []


@pytest.fixture
def orchestrator(target, connector, runner, script, events):
    hooks = OrchestratorHooks(
        step_started=lambda message: events.append(("started", message)),
        step_completed=lambda message: events.append(("completed", message)),
    )
    return Orchestrator(target, connector, runner, script_path=script, hooks=hooks)


@pytest.fixture
def missing_script(tmp_path):
    return tmp_path / "nope" / "db_recreate.sh"
