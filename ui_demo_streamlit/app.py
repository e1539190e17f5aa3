"""Streamlit preview UI for worklog-sync."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from worklog_sync.adapters.jsonl_adapter import parse_lines, read_events, to_log_line
from worklog_sync.normalizer import MAX_DURATION, MIN_DURATION
from worklog_sync.pipeline import merge_batch, preview
from worklog_sync.records import minute_duration
from worklog_sync.reducer import reduce_intervals
from worklog_sync.schema import BatchStatus

DEMO_LOG = Path("examples/sample_timer.log")


def _parse_uploaded(uploaded_file) -> list:
    text = uploaded_file.getvalue().decode("utf-8")
    return parse_lines(text.split("\n"))


def _fmt_minutes(value: float) -> str:
    return f"{value:.2f} min"


def run_preview(events: list) -> dict[str, Any]:
    """Run the reduction steps and return a UI-friendly result payload."""

    lines = [to_log_line(event) for event in events]
    raw_intervals = reduce_intervals(lines)
    periods = preview(events)
    _, held = merge_batch(events, [])
    in_progress = held is BatchStatus.IN_PROGRESS

    return {
        "total_events": len(events),
        "stopping_events": sum(1 for line in lines if line.stopping),
        "in_progress": in_progress,
        "raw_count": len(raw_intervals),
        "dropped": len(raw_intervals) - len(periods),
        "rows": [
            {
                "title": record.title,
                "raw": _fmt_minutes(minute_duration(raw.start, raw.end)),
                "normalized": _fmt_minutes(minute_duration(normalized.start, normalized.end)),
                "start": record.start,
                "end": record.end,
            }
            for raw, normalized, record in ([] if in_progress else periods)
        ],
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Worklog Sync Preview", layout="wide")
    st.title("Worklog Sync: Work Period Preview")

    with st.sidebar:
        st.header("Input")
        uploaded = st.file_uploader("Upload Tomotabar log", type=["log", "jsonl", "txt"])
        use_demo = st.checkbox("Load demo log", value=True)
        run = st.button("Preview", type="primary")

    if not run:
        st.info("Pick a log in the sidebar and click **Preview**.")
        return

    try:
        if use_demo:
            events = read_events(DEMO_LOG)
            data_source = f"demo log ({DEMO_LOG})"
        elif uploaded is not None:
            events = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a log file or enable 'Load demo log'.")
            return

        if not events:
            st.error("No transitions were found in the selected input.")
            return

        result = run_preview(events)
        st.success(f"Loaded {len(events)} transitions from {data_source}.")

        st.subheader("A) Log Summary")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Transitions", result["total_events"])
        c2.metric("Stopping", result["stopping_events"])
        c3.metric("Raw intervals", result["raw_count"])
        c4.metric("Dropped", result["dropped"])

        if result["in_progress"]:
            st.warning("The last work period is still running; a sync would deliver nothing yet.")

        st.subheader("B) Work Periods")
        st.caption(
            f"Rounded to whole minutes, kept from {MIN_DURATION.seconds // 60} "
            f"up to {MAX_DURATION.seconds // 60} minutes."
        )
        if result["rows"]:
            st.table(result["rows"])
        else:
            st.write("No work periods long enough to post.")

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
