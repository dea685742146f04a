from __future__ import annotations

import argparse
import sys

from sales_reader.config import resolve_config
from sales_reader.errors import SalesParseError, SalesSourceNotFoundError
from sales_reader.reader import SalesReader
from sales_reader.report import build_report_lines
from sales_reader.runlog import write_run_log


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sales Reader - aggregate report over a ';'-delimited sales file")

    p.add_argument("--config", type=str, default=None, help="Path to config.yaml (default: ./config.yaml if present)")
    p.add_argument("--input", type=str, default=None, help="Override input_file from config")
    p.add_argument("--currency", type=str, default=None, help="Override currency_code from config (e.g. BRL/USD)")
    p.add_argument("--top", type=int, default=None, help="How many sellers to rank (default from config: 3)")
    p.add_argument("--seller", action="append", default=None, help="Seller to total (repeatable)")
    p.add_argument("--manager", action="append", default=None, help="Manager to count (repeatable)")

    g = p.add_mutually_exclusive_group()
    g.add_argument("--run-log", action="store_true", help="Force run log on (override config)")
    g.add_argument("--no-run-log", action="store_true", help="Force run log off (override config)")

    return p.parse_args(argv)


def main(argv: list[str]) -> int:
    args = parse_args(argv)

    run_log = None
    if args.run_log:
        run_log = True
    if args.no_run_log:
        run_log = False

    try:
        cfg = resolve_config(
            config_path=args.config,
            cli_input=args.input,
            cli_currency=args.currency,
            cli_top_n=args.top,
            cli_sellers=args.seller,
            cli_managers=args.manager,
            cli_run_log=run_log,
        )
    except Exception as e:
        print(f"ERROR loading config: {e}", file=sys.stderr)
        return 2

    try:
        reader = SalesReader(
            cfg.input_file,
            delimiter=cfg.delimiter,
            encoding=cfg.encoding,
            aliases=cfg.aliases,
        )
    except SalesSourceNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except SalesParseError as e:
        print(f"ERROR parsing {cfg.input_file}: {e}", file=sys.stderr)
        return 2

    for w in reader.warnings:
        print(f"WARNING: {w}", file=sys.stderr)

    for line in build_report_lines(reader, cfg):
        print(line)

    if cfg.write_run_log:
        log_path = cfg.out_dir / "run_log.txt"
        write_run_log(
            log_path,
            input_file=str(cfg.input_file),
            currency=cfg.currency_code,
            sales=reader.sales,
            warnings=reader.warnings,
        )
        print(f"🧾 Run log written: {log_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
