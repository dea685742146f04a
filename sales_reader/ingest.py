from __future__ import annotations

from pathlib import Path
import pandas as pd

from .errors import SalesParseError, SalesSourceNotFoundError


DATA_DIR = Path(__file__).parent / "data"
DEFAULT_SOURCE = "sales.csv"


def resolve_source(name: str | Path) -> Path:
    """
    Find the sales file. Relative names that don't exist from the working
    directory are looked up in the bundled data folder.
    """
    path = Path(name)
    candidates = [path]
    if not path.is_absolute():
        candidates.append(DATA_DIR / path)

    for p in candidates:
        if p.is_file():
            if p.stat().st_size == 0:
                break
            return p

    raise SalesSourceNotFoundError(f"File not found or is empty: {name}")


def read_sales_file(path: Path, *, delimiter: str = ";", encoding: str = "utf-8") -> pd.DataFrame:
    try:
        df = pd.read_csv(
            path,
            sep=delimiter,
            encoding=encoding,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        # whitespace-only files get past the size check
        raise SalesSourceNotFoundError(f"File not found or is empty: {path}") from None
    except pd.errors.ParserError as e:
        raise SalesParseError(f"Malformed CSV in {path.name}: {e}") from e
    except UnicodeDecodeError as e:
        raise SalesParseError(f"{path.name} is not valid {encoding}: {e}") from e

    # Track lineage for error messages
    df["source_row"] = range(1, len(df) + 1)
    return df


def read_sales(name: str | Path = DEFAULT_SOURCE, *, delimiter: str = ";", encoding: str = "utf-8") -> pd.DataFrame:
    return read_sales_file(resolve_source(name), delimiter=delimiter, encoding=encoding)
