"""Timesheet System package.

Employee time tracking (clock in/out with photo capture and activity notes)
and wage calculation for administrators. Organized by feature modules
(work_entries, users, admin_profile, payroll) with thin Flask controllers
over service/repository layers.
"""
