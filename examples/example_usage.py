"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the clock-in / clock-out rules and wage figures live in services.
"""

import importlib

from config import get_settings_module

from src.timesheet_system.timesheet_system.container import build_container
from src.timesheet_system.timesheet_system.payroll.rates import HourlyRate, RateBook


def main():
    settings_module = importlib.import_module(get_settings_module())
    settings = {k: getattr(settings_module, k) for k in dir(settings_module) if k.isupper()}
    container = build_container(settings)

    entry = container.work_session_service.start_work("emp001", "Inventory count")
    container.work_session_service.end_work(entry.entry_id, "emp001", "Inventory count, aisle 1-4")

    rates = RateBook({"emp001": HourlyRate.from_input("12", "50")})
    report = container.wage_report_service.build_wage_report(rates=rates)
    for row in report.rows:
        print(row.employee_name, row.overall.display_total, row.overall.wage)


if __name__ == "__main__":
    main()
