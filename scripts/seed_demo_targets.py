from __future__ import annotations

import argparse
import os
import sys
from datetime import date
from decimal import Decimal

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create default KPI and sales targets for an employee unless they already exist."
    )
    parser.add_argument("employee_id", help="users.id of the employee.")
    parser.add_argument("--year", type=int, default=date.today().year, help="Target year.")
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    from src.api.dependencies import get_targets_service
    from src.schemas.targets import KpiTargetCreateRequest, SalesTargetCreateRequest

    service = get_targets_service()

    if service.get_kpi_target(args.employee_id, args.year):
        print(f"KPI target for {args.year} already exists")
    else:
        service.save_kpi_target(
            KpiTargetCreateRequest(
                employee_id=args.employee_id,
                year=args.year,
                annual_volume_goal=Decimal("100000000.00"),
                avg_loan_amount=Decimal("350000.00"),
                required_units_monthly=24,
                lock_percentage=Decimal("90.00"),
                locked_loans_monthly=26,
                new_file_to_locked_percentage=Decimal("55.00"),
                new_files_monthly=Decimal("48.10"),
            )
        )
        print(f"KPI target for {args.year} created")

    if service.get_sales_target(args.employee_id, args.year):
        print(f"Sales target for {args.year} already exists")
    else:
        service.save_sales_target(SalesTargetCreateRequest(employee_id=args.employee_id, year=args.year))
        print(f"Sales target for {args.year} created")


if __name__ == "__main__":
    main()
