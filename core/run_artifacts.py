"""Run artifact helpers: persist extraction reports for the rendering layer."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Protocol


class SerializableReport(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


def write_extraction_report(
    report: SerializableReport,
    run_id: str,
    output_dir: str = "output/extraction_reports",
) -> str:
    """Write an extraction report as ``<output_dir>/<run_id>.json``.

    The payload is the report's ``to_dict()`` plus ``run_id`` and
    ``timestamp_utc``. Returns the written path.
    """
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report.to_dict())
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
        f.write("\n")
    return path
