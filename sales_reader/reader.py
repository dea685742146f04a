from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Iterable

from . import kpis
from .clean import clean
from .ingest import DEFAULT_SOURCE, read_sales
from .models import Sale, Status


class SalesReader:
    """
    Loads a sales file once and answers aggregate queries over it.

    Construction fails with SalesSourceNotFoundError or SalesParseError;
    there is no partial load.
    """

    def __init__(
        self,
        sales_file: str | Path = DEFAULT_SOURCE,
        *,
        delimiter: str = ";",
        encoding: str = "utf-8",
        aliases: dict[str, str] | None = None,
    ) -> None:
        df_raw = read_sales(sales_file, delimiter=delimiter, encoding=encoding)
        result = clean(df_raw, aliases=aliases)
        self.source = str(sales_file)
        self.warnings = result.warnings
        self._load(result.sales)

    @classmethod
    def from_sales(cls, sales: Iterable[Sale]) -> "SalesReader":
        reader = cls.__new__(cls)
        reader.source = "<memory>"
        reader.warnings = []
        reader._load(sales)
        return reader

    def _load(self, sales: Iterable[Sale]) -> None:
        self._sales = tuple(sales)
        self._df = kpis.sales_frame(self._sales)

    @property
    def sales(self) -> tuple[Sale, ...]:
        return self._sales

    def __len__(self) -> int:
        return len(self._sales)

    def total_of_completed_sales(self) -> Decimal:
        return kpis.total_by_status(self._df, Status.COMPLETED)

    def total_of_cancelled_sales(self) -> Decimal:
        return kpis.total_by_status(self._df, Status.CANCELLED)

    def most_recent_completed_sale(self) -> Sale | None:
        """None means there is no completed sale."""
        return kpis.most_recent_completed_sale(self._df)

    def days_between_first_and_last_cancelled_sale(self) -> int:
        """Raises NoCancelledSalesError when the data has no cancelled sale."""
        return kpis.days_between_first_and_last_cancelled_sale(self._df)

    def total_completed_sales_by_seller(self, seller_name: str) -> Decimal:
        return kpis.total_completed_sales_by_seller(self._df, seller_name)

    def count_all_sales_by_manager(self, manager_name: str) -> int:
        return kpis.count_all_sales_by_manager(self._df, manager_name)

    def total_sales_by_status_and_month(self, status: Status | str, *months: int) -> Decimal:
        return kpis.total_sales_by_status_and_month(self._df, status, months)

    def count_completed_sales_by_department(self) -> dict[str, int]:
        return kpis.count_completed_sales_by_department(self._df)

    def count_completed_sales_by_payment_method_and_grouping_by_year(self) -> dict[int, dict[str, int]]:
        return kpis.count_completed_sales_by_payment_method_and_year(self._df)

    def top_sellers(self, n: int = 3) -> dict[str, Decimal]:
        return kpis.top_sellers(self._df, n)

    def top3_best_sellers(self) -> dict[str, Decimal]:
        return self.top_sellers(3)

    def sellers(self) -> list[str]:
        return kpis.distinct(self._df, "seller")

    def managers(self) -> list[str]:
        return kpis.distinct(self._df, "manager")
