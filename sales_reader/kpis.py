from __future__ import annotations

from decimal import Decimal
from typing import Iterable
import pandas as pd

from .errors import NoCancelledSalesError
from .models import FIELDS, Sale, Status


ZERO = Decimal("0")


def sales_frame(sales: Iterable[Sale]) -> pd.DataFrame:
    """One row per sale, in file order. `value` stays a Decimal (object) column."""
    df = pd.DataFrame([s.as_row() for s in sales], columns=FIELDS)
    df["sale_date"] = pd.to_datetime(df["sale_date"])
    return df


def _is(df: pd.DataFrame, status: Status) -> pd.Series:
    return df["status"] == status.value


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def _to_sale(row: pd.Series) -> Sale:
    return Sale(
        seller=row["seller"],
        manager=row["manager"],
        department=row["department"],
        payment_method=row["payment_method"],
        status=Status(row["status"]),
        sale_date=row["sale_date"].date(),
        value=row["value"],
    )


def total_by_status(df: pd.DataFrame, status: Status) -> Decimal:
    return _sum(df.loc[_is(df, status), "value"])


def most_recent_completed_sale(df: pd.DataFrame) -> Sale | None:
    dates = df.loc[_is(df, Status.COMPLETED), "sale_date"]
    if dates.empty:
        return None
    # idxmax keeps the first of equal dates
    return _to_sale(df.loc[dates.idxmax()])


def days_between_first_and_last_cancelled_sale(df: pd.DataFrame) -> int:
    dates = df.loc[_is(df, Status.CANCELLED), "sale_date"]
    if dates.empty:
        raise NoCancelledSalesError("No cancelled sales to measure a date span")
    return int((dates.max() - dates.min()).days)


def total_completed_sales_by_seller(df: pd.DataFrame, seller: str) -> Decimal:
    mask = _is(df, Status.COMPLETED) & (df["seller"] == seller)
    return _sum(df.loc[mask, "value"])


def count_all_sales_by_manager(df: pd.DataFrame, manager: str) -> int:
    return int((df["manager"] == manager).sum())


def _months(months: Iterable[int]) -> list[int]:
    out: list[int] = []
    for m in months:
        m = int(m)
        if not 1 <= m <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {m}")
        out.append(m)
    return out


def total_sales_by_status_and_month(df: pd.DataFrame, status: Status | str, months: Iterable[int]) -> Decimal:
    status = status if isinstance(status, Status) else Status.parse(status)
    mask = _is(df, status) & df["sale_date"].dt.month.isin(_months(months))
    return _sum(df.loc[mask, "value"])


def count_completed_sales_by_department(df: pd.DataFrame) -> dict[str, int]:
    counts = df.loc[_is(df, Status.COMPLETED)].groupby("department").size()
    return {str(k): int(v) for k, v in counts.items()}


def count_completed_sales_by_payment_method_and_year(df: pd.DataFrame) -> dict[int, dict[str, int]]:
    done = df.loc[_is(df, Status.COMPLETED)]
    counts = done.groupby([done["sale_date"].dt.year.rename("year"), "payment_method"]).size()

    out: dict[int, dict[str, int]] = {}
    for (year, method), n in counts.items():
        out.setdefault(int(year), {})[str(method)] = int(n)
    return out


def completed_totals_by_seller(df: pd.DataFrame) -> dict[str, Decimal]:
    totals = df.loc[_is(df, Status.COMPLETED)].groupby("seller")["value"].agg(_sum)
    return {str(k): v for k, v in totals.items()}


def top_sellers(df: pd.DataFrame, n: int = 3) -> dict[str, Decimal]:
    """Highest completed totals first; equal totals by seller name."""
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    totals = completed_totals_by_seller(df)
    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))[:n]
    return dict(ranked)


def distinct(df: pd.DataFrame, column: str) -> list[str]:
    return sorted(str(v) for v in df[column].unique())
