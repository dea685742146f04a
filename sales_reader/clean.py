from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any
import pandas as pd

from .errors import SalesParseError
from .models import FIELDS, Sale, Status


def _snake(s: str) -> str:
    s = s.strip()
    s = re.sub(r"[^\w]+", "_", s)      # spaces/punct -> _
    s = re.sub(r"_+", "_", s)
    return s.lower().strip("_")


DEFAULT_ALIASES = {
    # seller
    "seller": "seller",
    "salesperson": "seller",
    "vendedor": "seller",
    # manager
    "manager": "manager",
    "gerente": "manager",
    # department
    "department": "department",
    "dept": "department",
    "departamento": "department",
    # payment method
    "payment_method": "payment_method",
    "paymentmethod": "payment_method",
    "payment": "payment_method",
    "forma_pagamento": "payment_method",
    "forma_de_pagamento": "payment_method",
    # status
    "status": "status",
    "situacao": "status",
    # date
    "sale_date": "sale_date",
    "saledate": "sale_date",
    "date": "sale_date",
    "data": "sale_date",
    "data_venda": "sale_date",
    # value
    "value": "value",
    "amount": "value",
    "valor": "value",
}


DATE_FORMAT = "%d/%m/%Y"
LINEAGE = "source_row"

_NUMBER = re.compile(r"^[+-]?\d[\d.,]*$")


@dataclass(frozen=True)
class CleanResult:
    sales: list[Sale]
    warnings: list[str]


def standardise_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [_snake(str(c)) for c in df.columns]
    return df


def apply_aliases(df: pd.DataFrame, aliases: dict[str, str] | None = None) -> pd.DataFrame:
    df = df.copy()
    aliases = {_snake(k): v for k, v in aliases.items()} if aliases else DEFAULT_ALIASES

    ren: dict[str, str] = {}
    for c in df.columns:
        if c in aliases:
            ren[c] = aliases[c]
    df = df.rename(columns=ren)

    # e.g. both "date" and "sale_date" in one header
    dupes = sorted(set(df.columns[df.columns.duplicated()]))
    if dupes:
        raise SalesParseError(f"Ambiguous columns after aliasing: {', '.join(dupes)}")

    return df


def _blank(s: pd.Series) -> pd.Series:
    return s.isna() | (s.astype(str).str.strip() == "")


def _rows(df: pd.DataFrame, mask: pd.Series) -> list[int]:
    return [int(r) for r in df.loc[mask, LINEAGE]]


def validate(df: pd.DataFrame) -> list[str]:
    """Fail on a layout we can't load; return warnings for what we can."""
    missing = [c for c in FIELDS if c not in df.columns]
    if missing:
        raise SalesParseError(f"Missing required column(s): {', '.join(missing)}")

    for c in FIELDS:
        bad = _blank(df[c])
        if bad.any():
            rows = _rows(df, bad)
            raise SalesParseError(f"Empty '{c}' value", row=rows[0])

    extra = [c for c in df.columns if c not in FIELDS and c != LINEAGE]
    warnings: list[str] = []
    if extra:
        warnings.append(f"Ignored column(s): {', '.join(extra)}")
    return warnings


def parse_value(raw: Any) -> Decimal:
    """
    Exact decimal from text. The right-most of ',' and '.' is taken as the
    decimal mark, the other one as a thousands separator.
    """
    text = str(raw).strip().replace(" ", "")
    if not _NUMBER.match(text):
        raise ValueError(f"Invalid monetary value: {raw!r}")

    comma, dot = text.rfind(","), text.rfind(".")
    if comma > dot:
        text = text.replace(".", "").replace(",", ".")
    elif comma != -1:
        text = text.replace(",", "")

    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Invalid monetary value: {raw!r}") from None


def parse_sale_dates(df: pd.DataFrame) -> pd.Series:
    parsed = pd.to_datetime(df["sale_date"].str.strip(), format=DATE_FORMAT, errors="coerce")
    bad = parsed.isna()
    if bad.any():
        rows = _rows(df, bad)
        raise SalesParseError(
            f"Unparseable sale date (expected dd/mm/yyyy) in rows: {', '.join(map(str, rows))}",
            row=rows[0],
        )
    return parsed


def coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()

    # Date FIRST, on the raw text
    df["sale_date"] = parse_sale_dates(df)

    for c in ["seller", "manager", "department", "payment_method", "status", "value"]:
        df[c] = df[c].astype(str).str.strip()

    return df


def to_sales(df: pd.DataFrame) -> list[Sale]:
    sales: list[Sale] = []
    for row in df[FIELDS + [LINEAGE]].itertuples(index=False):
        try:
            status = Status.parse(row.status)
            value = parse_value(row.value)
        except ValueError as e:
            raise SalesParseError(str(e), row=int(row.source_row)) from e

        sales.append(
            Sale(
                seller=row.seller,
                manager=row.manager,
                department=row.department,
                payment_method=row.payment_method,
                status=status,
                sale_date=row.sale_date.date(),
                value=value,
            )
        )
    return sales


def clean(df_raw: pd.DataFrame, aliases: dict[str, str] | None = None) -> CleanResult:
    df = standardise_columns(df_raw)
    df = apply_aliases(df, aliases=aliases)
    warnings = validate(df)
    df = coerce_types(df)
    return CleanResult(sales=to_sales(df), warnings=warnings)
