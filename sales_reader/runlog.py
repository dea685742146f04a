from __future__ import annotations

from collections import Counter
from pathlib import Path
from datetime import datetime

from .models import Sale


def write_run_log(
    out_path: Path,
    *,
    input_file: str,
    currency: str,
    sales: tuple[Sale, ...] | list[Sale],
    warnings: list[str] | None,
) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("Sales Reader - Run Log")
    lines.append(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append("")
    lines.append(f"Input file: {input_file}")
    lines.append(f"Currency: {currency}")
    lines.append(f"Rows loaded: {len(sales)}")

    if sales:
        dates = [s.sale_date for s in sales]
        lines.append(f"Sale dates: {min(dates):%d/%m/%Y} to {max(dates):%d/%m/%Y}")

    lines.append("")
    lines.append("Rows by status:")
    counts = Counter(s.status.value for s in sales)
    if counts:
        for status, n in sorted(counts.items()):
            lines.append(f"- {status}: {n}")
    else:
        lines.append("- (none)")

    lines.append("")
    lines.append("Warnings:")
    if warnings:
        for w in warnings:
            lines.append(f"- {w}")
    else:
        lines.append("- (none)")

    out_path.write_text("\n".join(lines), encoding="utf-8")
