"""Create sample master/source workbooks for local runs of horizons-sync.

Usage:
    python scripts/seed_workbooks.py --out-dir ./sample --period 2026-10
    horizons-sync --master-workbook sample/master.xlsx \
        --source-workbook sample/source.xlsx run --tabs "Germany, France"
"""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path
from typing import Any

from openpyxl import Workbook

MASTER_HEADERS: list[str] = [
    "Country", "Employee", "Code", "Entity", "Currency", "Cost Center", "Pay Date",
    "Status", "Notes", "Approver", "Invoice", "Due", "FX Rate",
    "Gross Income", "Employer Social Security", "Employer Pension",
    "Employer Health Insurance", "Payroll Tax Surcharge", "", "", "", "",
    "Gross Pay (local)", "Pension ER", "Health ER", "Tax Surcharge", "Misc",
]

TABS: dict[str, list[tuple[str, str]]] = {
    "Germany": [("Anna Becker", "PSM-DE-001"), ("Jonas Weber", "PSM-DE-002")],
    "France": [("Claire Dubois", "PSM-FR-001"), ("Luc Martin", "CTR-FR-900")],
}

SOURCE_HEADERS = ["Employee", "Burden", "Period", "Amount", "Currency", "Entity", "Notes", "FX Rate"]

SOURCE_ROWS: list[tuple[str, str, float, float]] = [
    ("Anna Becker", "Gross Income", 5200.00, 1.08),
    ("Anna Becker", "Employer Pension", 480.50, 1.08),
    ("Anna Becker", "Employer Pension", 19.50, 1.08),
    ("Jonas Weber", "Gross Income", 4100.00, 1.08),
    ("Jonas Weber", "Payroll Tax Surcharge", 85.25, 1.08),
    ("Claire Dubois", "Gross Income", 4700.00, 1.08),
    ("Claire Dubois", "Employer Health Insurance", 310.00, 1.08),
    ("Claire Dubois", "Meal Vouchers", 120.00, 1.08),
    ("Luc Martin", "Gross Income", 3900.00, 1.08),
]


def build_master(period: date) -> Workbook:
    """Master workbook: a summary tab plus one tab per country."""
    wb = Workbook()
    summary = wb.active
    summary.title = "master"
    summary.append(["Country", "Employees"])
    for tab, employees in TABS.items():
        ws = wb.create_sheet(tab)
        ws.append(MASTER_HEADERS)
        for name, code in employees:
            row: list[Any] = [tab, name, code, f"{tab} GmbH", "EUR", "CC-100", period]
            ws.append(row)
        summary.append([tab, len(employees)])
    return wb


def build_source(period: date) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = "Sheet1"
    ws.append(SOURCE_HEADERS)
    for name, burden, amount, fx in SOURCE_ROWS:
        ws.append([name, burden, period.strftime("%Y-%m"), amount, "EUR", "", "", fx])
    return wb


def seed(out_dir: Path, period: date) -> tuple[Path, Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    master_path = out_dir / "master.xlsx"
    source_path = out_dir / "source.xlsx"
    build_master(period).save(master_path)
    print(f"  Wrote {master_path}")
    build_source(period).save(source_path)
    print(f"  Wrote {source_path} ({len(SOURCE_ROWS)} rows)")
    return master_path, source_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample workbooks for Horizons payroll sync")
    parser.add_argument("--out-dir", default="sample", help="Output directory")
    parser.add_argument("--period", default=None, help="Reporting period YYYY-MM (default: this month)")
    args = parser.parse_args()

    if args.period:
        year, month = (int(part) for part in args.period.split("-"))
        period = date(year, month, 15)
    else:
        today = date.today()
        period = date(today.year, today.month, 15)

    print("Seeding workbooks...")
    seed(Path(args.out_dir), period)
    print("Done!")


if __name__ == "__main__":
    main()
