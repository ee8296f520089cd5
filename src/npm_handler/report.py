"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .core import STATUS_DONE, STATUS_SKIPPED, TargetOutcome


def _target_entry(outcome: TargetOutcome) -> dict[str, Any]:
    return {
        "path": outcome.manifest_path,
        "status": outcome.status,
        "exitCode": outcome.result.exit_code if outcome.result is not None else None,
        "error": str(outcome.error) if outcome.error is not None else None,
    }


def aggregate(outcomes: Iterable[TargetOutcome]) -> dict[str, Any]:
    """Aggregate per-directory outcomes into a single report.

    ``installed`` counts runs that exited 0, ``failed`` runs with any other exit
    code, and ``skipped`` directories whose executable could not be resolved.
    """
    outcomes = list(outcomes)
    installed = sum(
        1 for o in outcomes if o.status == STATUS_DONE and o.result is not None and o.result.succeeded
    )
    skipped = sum(1 for o in outcomes if o.status == STATUS_SKIPPED)
    failed = len(outcomes) - installed - skipped

    report: dict[str, Any] = {
        "version": "1",
        "hasFailures": failed > 0 or skipped > 0,
        "targets": [_target_entry(o) for o in outcomes],
        "totals": {
            "targets": len(outcomes),
            "installed": installed,
            "failed": failed,
            "skipped": skipped,
        },
    }

    return report
