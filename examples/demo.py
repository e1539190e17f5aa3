"""Demo script for worklog-sync."""

import shutil
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from worklog_sync.config import Settings, default_recovery_path
from worklog_sync.pipeline import sync
from worklog_sync.sink import MemorySink


def main() -> None:
    workdir = Path(tempfile.mkdtemp())
    log_path = workdir / "tomotabar.log"
    shutil.copy("examples/sample_timer.log", log_path)
    settings = Settings(
        notion_api_key="demo",
        notion_database_id="demo",
        log_path=log_path,
        recovery_path=default_recovery_path(log_path),
    )

    # refuse the 11 minute period on the first run
    flaky = MemorySink(fail_on=lambda record: record.title.startswith("⏳ 10.8"))
    print("First run:", sync(settings, flaky))
    for record in flaky.records:
        print("  posted", record)
    print("Recovery log:", settings.recovery_path.read_text(encoding="utf-8"), sep="\n")

    healthy = MemorySink()
    print("Second run:", sync(settings, healthy))
    for record in healthy.records:
        print("  posted", record)


if __name__ == "__main__":
    main()
