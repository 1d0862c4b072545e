"""
Report generators for batch calibration results.

Formats results for console and JSON output.
"""

import json
from pathlib import Path

from .service import BatchReport


class ReportGenerator:
    """Generate batch reports in various formats."""

    def generate_console(self, report: BatchReport) -> str:
        """Generate ASCII report for console output."""

        lines = [
            "",
            "=" * 70,
            "                FREE SPEED CALIBRATION REPORT",
            "=" * 70,
            "",
            f"Run at:         {report.run_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Evaluations:    {len(report.entries)}",
            "",
            "Label    | Request                | RMSE     | MAE (km/h) | Diagnostics",
            "---------|------------------------|----------|------------|------------",
        ]

        for entry in report.entries:
            request = str(entry.request) if entry.request is not None else "baseline"
            n_diag = sum(entry.result.diagnostic_counts().values())
            lines.append(
                f"{entry.label:<8} | {request[:22]:<22} | {entry.result.rmse:>8.3f} | "
                f"{entry.result.mae:>10.2f} | {n_diag:>11}"
            )

        best = report.best
        if best is not None:
            lines.extend([
                "",
                f"Best: {best.label} (MAE {best.result.mae:.2f} km/h)",
            ])

        lines.extend([
            "",
            "=" * 70,
        ])

        return "\n".join(lines)

    def generate_json(self, report: BatchReport) -> dict:
        """Generate JSON-serializable dict."""
        return {
            "run_at": report.run_at.isoformat(),
            "best": report.best.label if report.best else None,
            "evaluations": [
                {
                    "label": e.label,
                    "request": (
                        e.request.model_dump(exclude_defaults=True)
                        if e.request is not None else None
                    ),
                    "rmse": e.result.rmse,
                    "mae": e.result.mae,
                    "diagnostics": e.result.diagnostic_counts(),
                }
                for e in report.entries
            ],
        }

    def save_json(self, report: BatchReport, path: Path) -> None:
        """Save report as JSON file."""
        data = self.generate_json(report)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
