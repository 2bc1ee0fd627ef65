from __future__ import annotations

import io

import pandas as pd

from .model import WageReport

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SUMMARY_COLUMNS = [
    "Employee ID",
    "Employee",
    "Hourly rate (EUR)",
    "Total minutes",
    "Total time",
    "Wage (EUR)",
    "Month",
    "Month minutes",
    "Month wage (EUR)",
]

ENTRY_COLUMNS = [
    "Employee ID",
    "Employee",
    "Date",
    "Start",
    "End",
    "Minutes",
    "Activity",
]


def wage_report_frames(report: WageReport) -> tuple[pd.DataFrame, pd.DataFrame]:
    summary = []
    details = []
    for row in report.rows:
        summary.append(
            {
                "Employee ID": row.user_id,
                "Employee": row.employee_name,
                "Hourly rate (EUR)": float(row.rate.effective),
                "Total minutes": row.overall.total_minutes,
                "Total time": row.overall.display_total,
                "Wage (EUR)": round(float(row.overall.wage), 2),
                "Month": row.monthly.month if row.monthly else "",
                "Month minutes": row.monthly.total_minutes if row.monthly else None,
                "Month wage (EUR)": round(float(row.monthly.wage), 2) if row.monthly else None,
            }
        )
        for day in row.days:
            for e in day.entries:
                details.append(
                    {
                        "Employee ID": row.user_id,
                        "Employee": row.employee_name,
                        "Date": e.work_date,
                        "Start": e.start_time,
                        "End": e.end_time or "",
                        "Minutes": e.duration_minutes,
                        "Activity": e.activity,
                    }
                )

    return (
        pd.DataFrame(summary, columns=SUMMARY_COLUMNS),
        pd.DataFrame(details, columns=ENTRY_COLUMNS),
    )


def wage_report_to_xlsx(report: WageReport) -> bytes:
    """Two sheets: one summary row per employee, then every entry in the report."""
    summary, details = wage_report_frames(report)

    # Written in memory, never to disk.
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        summary.to_excel(writer, index=False, sheet_name="Wages")
        details.to_excel(writer, index=False, sheet_name="Entries")
    return output.getvalue()


def export_filename(report: WageReport) -> str:
    scope = report.month or "all-months"
    who = report.employee if report.employee else "all"
    return f"wage_report_{who}_{scope}.xlsx"
