from __future__ import annotations

import calendar
from decimal import Decimal

from .config import AppConfig
from .errors import NoCancelledSalesError
from .reader import SalesReader


def _fmt_currency(x: Decimal, currency_code: str) -> str:
    code = (currency_code or "BRL").upper().strip()
    return f"{code} {x:,.2f}"


def _fmt_months(months: list[int]) -> str:
    if not months:
        return "(no months)"
    return ", ".join(calendar.month_abbr[m] for m in months)


def build_report_lines(reader: SalesReader, cfg: AppConfig) -> list[str]:
    """Every aggregate as printable text, one section per query."""
    cur = cfg.currency_code
    lines: list[str] = [cfg.report_title, f"Loaded {len(reader)} sales from {reader.source}", ""]

    lines.append("Totals")
    lines.append(f"  Completed: {_fmt_currency(reader.total_of_completed_sales(), cur)}")
    lines.append(f"  Cancelled: {_fmt_currency(reader.total_of_cancelled_sales(), cur)}")
    lines.append("")

    lines.append("Most recent completed sale")
    sale = reader.most_recent_completed_sale()
    if sale is None:
        lines.append("  (none)")
    else:
        lines.append(
            f"  {sale.sale_date:%d/%m/%Y} - {sale.seller} ({sale.department}, {sale.payment_method}): "
            f"{_fmt_currency(sale.value, cur)}"
        )
    lines.append("")

    lines.append("Days between first and last cancelled sale")
    try:
        lines.append(f"  {reader.days_between_first_and_last_cancelled_sale()}")
    except NoCancelledSalesError:
        lines.append("  N/A (no cancelled sales)")
    lines.append("")

    lines.append("Completed sales by seller")
    for name in cfg.sellers or reader.sellers():
        lines.append(f"  {name}: {_fmt_currency(reader.total_completed_sales_by_seller(name), cur)}")
    lines.append("")

    lines.append("Sales by manager (any status)")
    for name in cfg.managers or reader.managers():
        lines.append(f"  {name}: {reader.count_all_sales_by_manager(name)}")
    lines.append("")

    total = reader.total_sales_by_status_and_month(cfg.status, *cfg.months)
    lines.append(f"{cfg.status.value.title()} sales in {_fmt_months(cfg.months)}")
    lines.append(f"  {_fmt_currency(total, cur)}")
    lines.append("")

    lines.append("Completed sales by department")
    for dept, n in sorted(reader.count_completed_sales_by_department().items()):
        lines.append(f"  {dept}: {n}")
    lines.append("")

    lines.append("Completed sales by payment method per year")
    for year, methods in sorted(reader.count_completed_sales_by_payment_method_and_grouping_by_year().items()):
        lines.append(f"  {year}")
        for method, n in sorted(methods.items()):
            lines.append(f"    {method}: {n}")
    lines.append("")

    lines.append(f"Top {cfg.top_n} sellers by completed sales")
    for rank, (name, value) in enumerate(reader.top_sellers(cfg.top_n).items(), start=1):
        lines.append(f"  {rank}. {name}: {_fmt_currency(value, cur)}")

    return lines
