import asyncio

import pytest

from build_occurrence import main as entrypoint

def _env(tmp_path, **overrides):
    env = {
        "ARTIFACT_ID": "artifact",
        "BUILD_COLLECTOR_HOST": "collector.example.com",
        "GITHUB_ACTOR": "octocat",
        "GITHUB_SHA": "abc123",
        "GITHUB_JOB": "build",
        "GITHUB_REPOSITORY": "org/repo",
        "GITHUB_RUN_ID": "1234",
        "GITHUB_SERVER_URL": "https://github.com",
        "GITHUB_TOKEN": "ghs_token",
        "GITHUB_OUTPUT": str(tmp_path / "output"),
    }
    env.update(overrides)
    return env

class DummyGitHub:
    instances = []
    started_at = "2024-01-01T00:00:00Z"

    def __init__(self, token, base_url=None):
        self.token = token
        self.base_url = base_url
        self.closed = False
        DummyGitHub.instances.append(self)

    async def list_jobs_for_workflow_run(self, owner, repo, run_id):
        return {"jobs": [{"id": 42, "name": "build", "started_at": self.started_at}]}

    async def close(self):
        self.closed = True

class DummyCollector:
    instances = []
    occurrence_id = "occ-123"
    delay = 0

    def __init__(self, host, insecure=False, access_token=""):
        self.host = host
        self.closed = False
        DummyCollector.instances.append(self)

    async def create_build(self, request):
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.occurrence_id:
            raise RuntimeError("collector unavailable")
        return self.occurrence_id

    async def close(self):
        self.closed = True

@pytest.fixture
def dummies(monkeypatch):
    DummyGitHub.instances = []
    DummyGitHub.started_at = "2024-01-01T00:00:00Z"
    DummyCollector.instances = []
    DummyCollector.occurrence_id = "occ-123"
    DummyCollector.delay = 0
    monkeypatch.setattr(entrypoint, "GitHubClient", DummyGitHub)
    monkeypatch.setattr(entrypoint, "BuildCollectorClient", DummyCollector)

def test_main_publishes_occurrence_id(tmp_path, dummies):
    entrypoint.main(_env(tmp_path))

    assert (tmp_path / "output").read_text(encoding="utf-8") == "id=occ-123\n"
    assert DummyGitHub.instances[0].closed
    assert DummyCollector.instances[0].closed

def test_main_submission_failure_emits_no_output(tmp_path, dummies, capsys):
    DummyCollector.occurrence_id = ""

    with pytest.raises(SystemExit) as exc:
        entrypoint.main(_env(tmp_path))

    assert exc.value.code == 1
    assert "error creating build occurrence" in capsys.readouterr().out
    assert not (tmp_path / "output").exists()
    assert DummyGitHub.instances[0].closed
    assert DummyCollector.instances[0].closed

def test_main_deadline_exceeded(tmp_path, dummies, capsys):
    DummyCollector.delay = 5

    with pytest.raises(SystemExit) as exc:
        entrypoint.main(_env(tmp_path, ACTION_TIMEOUT_SECONDS="0.05"))

    assert exc.value.code == 1
    assert "did not finish" in capsys.readouterr().out
    assert not (tmp_path / "output").exists()

def test_main_configuration_error(tmp_path, dummies, capsys):
    env = _env(tmp_path)
    del env["GITHUB_RUN_ID"]

    with pytest.raises(SystemExit) as exc:
        entrypoint.main(env)

    assert exc.value.code == 1
    assert "unable to build config" in capsys.readouterr().out
    assert DummyGitHub.instances == []

def test_main_malformed_job_payload_exits_with_message(tmp_path, dummies, capsys):
    DummyGitHub.started_at = "not-a-date"

    with pytest.raises(SystemExit) as exc:
        entrypoint.main(_env(tmp_path))

    assert exc.value.code == 1
    assert "error listing jobs" in capsys.readouterr().out
    assert not (tmp_path / "output").exists()
