import pytest

from worklog_sync import cli
from worklog_sync.adapters.jsonl_adapter import serialize_event
from worklog_sync.schema import TransitionEvent
from worklog_sync.sink import MemorySink


def write_log(path, events):
    path.write_text("".join(serialize_event(event) + "\n" for event in events), encoding="utf-8")


@pytest.fixture
def log_path(tmp_path, monkeypatch):
    path = tmp_path / "tomotabar.log"
    monkeypatch.setenv("NOTION_API_KEY", "secret")
    monkeypatch.setenv("NOTION_DATABASE_ID", "db")
    monkeypatch.setenv("TOMOTABAR_LOG_PATH", str(path))
    monkeypatch.delenv("WORKLOG_RECOVERY_PATH", raising=False)
    return path


@pytest.fixture
def sink(monkeypatch):
    memory = MemorySink()
    monkeypatch.setattr(cli, "NotionSink", lambda api_key, database_id: memory)
    return memory


def env_file(tmp_path):
    return ["--env-file", str(tmp_path / "missing.env")]


def test_main_delivers(tmp_path, log_path, sink, capsys):
    write_log(log_path, [TransitionEvent("startStop", "idle", "work", 0), TransitionEvent("startStop", "work", "idle", 600)])

    assert cli.main(env_file(tmp_path)) == 0

    assert len(sink.records) == 1
    assert "1 work periods posted to Notion." in capsys.readouterr().out


def test_main_in_progress_exits_zero(tmp_path, log_path, sink):
    write_log(log_path, [TransitionEvent("startStop", "idle", "work", 0)])
    assert cli.main(env_file(tmp_path)) == 0
    assert sink.attempts == 0


def test_main_empty_log_exits_one(tmp_path, log_path, sink):
    assert cli.main(env_file(tmp_path)) == 1


def test_main_malformed_log_exits_one(tmp_path, log_path, sink):
    log_path.write_text("{oops\n", encoding="utf-8")
    assert cli.main(env_file(tmp_path)) == 1
    assert log_path.read_text(encoding="utf-8") == "{oops\n"


def test_main_missing_config(tmp_path, monkeypatch, capsys):
    for name in ("NOTION_API_KEY", "NOTION_DATABASE_ID", "TOMOTABAR_LOG_PATH"):
        monkeypatch.delenv(name, raising=False)

    assert cli.main(env_file(tmp_path)) == 1
    assert "Please set the NOTION_DATABASE_ID environment variable." in capsys.readouterr().err


def test_main_dry_run_keeps_log(tmp_path, log_path, sink, capsys):
    write_log(log_path, [TransitionEvent("startStop", "idle", "work", 0), TransitionEvent("startStop", "work", "idle", 600)])
    before = log_path.read_text(encoding="utf-8")

    assert cli.main(["--dry-run", *env_file(tmp_path)]) == 0

    assert sink.attempts == 0
    assert "⏳ 10" in capsys.readouterr().out
    assert log_path.read_text(encoding="utf-8") == before


def test_main_dry_run_in_progress_prints_nothing_to_post(tmp_path, log_path, sink, capsys):
    write_log(
        log_path,
        [
            TransitionEvent("startStop", "idle", "work", 0),
            TransitionEvent("startStop", "work", "idle", 600),
            TransitionEvent("startStop", "idle", "work", 1000),
        ],
    )

    assert cli.main(["--dry-run", *env_file(tmp_path)]) == 0

    out = capsys.readouterr().out
    assert "⏳" not in out
    assert "Nothing to deliver yet." in out
    assert sink.attempts == 0


def test_main_dry_run_open_primary_with_recovery(tmp_path, log_path, sink, capsys):
    write_log(log_path, [TransitionEvent("startStop", "idle", "work", 2000)])
    write_log(
        tmp_path / "tomotabar.log.recovery",
        [TransitionEvent("startStop", "idle", "work", 0), TransitionEvent("startStop", "work", "idle", 600)],
    )

    assert cli.main(["--dry-run", *env_file(tmp_path)]) == 0

    assert "⏳" not in capsys.readouterr().out


def test_main_unusable_timestamp_exits_one(tmp_path, log_path, sink):
    log_path.write_text(
        '{"event":"startStop","fromState":"idle","toState":"work","unixTimestamp":NaN,"type":"transition"}\n',
        encoding="utf-8",
    )
    assert cli.main(env_file(tmp_path)) == 1
    assert sink.attempts == 0
