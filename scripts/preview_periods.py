"""Preview the work periods a timer log would produce, without posting."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from worklog_sync.adapters.jsonl_adapter import read_events, to_log_line
from worklog_sync.pipeline import merge_batch, preview
from worklog_sync.reducer import reduce_intervals
from worklog_sync.schema import BatchStatus


def main() -> None:
    parser = argparse.ArgumentParser(description="Preview worklog-sync work periods")
    parser.add_argument("--data", required=True, help="Path to a Tomotabar transition log")
    args = parser.parse_args()

    events, held = merge_batch(read_events(Path(args.data)), [])
    lines = [to_log_line(event) for event in events]
    periods = [] if held is not None else preview(events)

    report = {
        "n_events": len(events),
        "in_progress": held is BatchStatus.IN_PROGRESS,
        "n_raw_intervals": len(reduce_intervals(lines)),
        "periods": [
            {
                "raw": {"start": raw.start.isoformat(), "end": raw.end.isoformat()},
                "normalized": {"start": normalized.start.isoformat(), "end": normalized.end.isoformat()},
                "title": record.title,
            }
            for raw, normalized, record in periods
        ],
    }

    print(json.dumps(report, indent=2, ensure_ascii=False))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "preview_report.json"
    out_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Saved preview report to {out_path}")


if __name__ == "__main__":
    main()
