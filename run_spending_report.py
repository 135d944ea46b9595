import argparse
import sys
from pathlib import Path

from spendview.config import Settings
from spendview.errors import SpendviewError
from spendview.loader import read_text_file
from spendview.logging_setup import configure_logging
from spendview.session import AnalysisSession
from spendview.table import transactions_frame
from spendview.utils import format_money
from spendview.viz import chart_data, slice_percentages


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print spending per category for a transactions CSV.")
    parser.add_argument("csv", type=Path, help="CSV with Date, Description, Amount, Category columns")
    parser.add_argument("--category", help="show the transactions of one category instead of all")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING ...")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    session = AnalysisSession(currency_symbol=settings.currency_symbol)
    try:
        load_result = session.load_text(read_text_file(args.csv), source_name=args.csv.name)
        view = session.select(args.category)
    except (OSError, UnicodeDecodeError, SpendviewError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    data = chart_data(session.result)
    print("=== BY CATEGORY ===")
    for label, value, pct in zip(data.labels, data.values, slice_percentages(data.values)):
        print(f"{label}: {format_money(value, settings.currency_symbol)} ({pct:.1f}%)")
    print(f"Total: {format_money(session.result.grand_total, settings.currency_symbol)}")
    if load_result.skipped or session.result.excluded:
        print(f"Skipped rows: {load_result.skipped}, excluded amounts: {session.result.excluded}")

    print(f"\n=== {view.header_label} ===")
    print(transactions_frame(view, currency_symbol=settings.currency_symbol).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
