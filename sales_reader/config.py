from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .models import Status


DEFAULT_CONFIG = "config.yaml"


@dataclass(frozen=True)
class AppConfig:
    input_file: Path = Path("sales.csv")
    delimiter: str = ";"
    encoding: str = "utf-8"
    currency_code: str = "BRL"
    aliases: dict[str, str] = field(default_factory=dict)

    # Report content
    report_title: str = "Sales Report"
    sellers: list[str] = field(default_factory=list)
    managers: list[str] = field(default_factory=list)
    status: Status = Status.COMPLETED
    months: list[int] = field(default_factory=lambda: [1, 2, 3])
    top_n: int = 3

    # Run toggles
    out_dir: Path = Path("out")
    write_run_log: bool = False


def load_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Config must be a YAML mapping (key: value)")
    return data


def _as_bool(x: Any, default: bool) -> bool:
    if x is None:
        return default
    if isinstance(x, bool):
        return x
    if isinstance(x, (int, float)):
        return bool(x)
    s = str(x).strip().lower()
    if s in {"true", "yes", "y", "1", "on"}:
        return True
    if s in {"false", "no", "n", "0", "off"}:
        return False
    return default


def _parse_names(raw: Any, key: str) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        s = raw.strip()
        return [s] if s else []
    if isinstance(raw, list):
        out: list[str] = []
        for x in raw:
            if x is None:
                continue
            s = str(x).strip()
            if s:
                out.append(s)
        return out
    raise ValueError(f"config.yaml {key} must be a string or a list of strings")


def _parse_status_months(raw: Any) -> tuple[Status, list[int]]:
    if raw is None:
        return Status.COMPLETED, [1, 2, 3]
    if not isinstance(raw, dict):
        raise ValueError("config.yaml status_months must be a mapping with 'status' and 'months'")

    status = Status.parse(raw.get("status", "COMPLETED"))
    months_raw = raw.get("months", [])
    if isinstance(months_raw, int):
        months_raw = [months_raw]
    if not isinstance(months_raw, list):
        raise ValueError("config.yaml status_months.months must be a list of month numbers")

    months = [int(m) for m in months_raw]
    bad = [m for m in months if not 1 <= m <= 12]
    if bad:
        raise ValueError(f"config.yaml status_months.months out of range: {bad}")
    return status, months


def resolve_config(
    *,
    config_path: str | None,
    cli_input: str | None = None,
    cli_currency: str | None = None,
    cli_top_n: int | None = None,
    cli_sellers: list[str] | None = None,
    cli_managers: list[str] | None = None,
    cli_run_log: bool | None = None,
) -> AppConfig:
    # A named config must exist; the default one is optional
    if config_path:
        raw = load_config(Path(config_path))
    elif Path(DEFAULT_CONFIG).exists():
        raw = load_config(Path(DEFAULT_CONFIG))
    else:
        raw = {}

    input_file = Path(str(raw.get("input_file", "sales.csv")))
    delimiter = str(raw.get("delimiter", ";"))
    if len(delimiter) != 1:
        raise ValueError("config.yaml delimiter must be a single character")
    encoding = str(raw.get("encoding", "utf-8")).strip() or "utf-8"
    currency_code = str(raw.get("currency_code", "BRL")).upper().strip()

    aliases_raw = raw.get("aliases", {}) or {}
    if not isinstance(aliases_raw, dict):
        raise ValueError("config.yaml aliases must be a mapping")
    aliases = {str(k): str(v) for k, v in aliases_raw.items()}

    report_title = str(raw.get("report_title", "Sales Report")).strip() or "Sales Report"
    sellers = _parse_names(raw.get("sellers"), "sellers")
    managers = _parse_names(raw.get("managers"), "managers")
    status, months = _parse_status_months(raw.get("status_months"))

    top_n = int(raw.get("top_n", 3))
    if top_n < 0:
        raise ValueError("config.yaml top_n must be >= 0")

    out_dir = Path(str(raw.get("out_dir", "out")))
    write_run_log = _as_bool(raw.get("write_run_log"), False)

    # CLI overrides config (optional)
    if cli_top_n is not None and cli_top_n < 0:
        raise ValueError("--top must be >= 0")

    return AppConfig(
        input_file=Path(cli_input) if cli_input else input_file,
        delimiter=delimiter,
        encoding=encoding,
        currency_code=cli_currency.upper().strip() if cli_currency else currency_code,
        aliases=aliases,
        report_title=report_title,
        sellers=cli_sellers or sellers,
        managers=cli_managers or managers,
        status=status,
        months=months,
        top_n=cli_top_n if cli_top_n is not None else top_n,
        out_dir=out_dir,
        write_run_log=write_run_log if cli_run_log is None else cli_run_log,
    )
