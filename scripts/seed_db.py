from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timesheet_system.timesheet_system.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings_module = importlib.import_module(get_settings_module())
    settings = {k: getattr(settings_module, k) for k in dir(settings_module) if k.isupper()}

    # build_container seeds the admin and demo accounts that are missing.
    container = build_container(settings, seed_users=True)

    employees = container.employee_service.list_employees()
    print(f"OK: Seeded users ({settings.get('STORAGE_BACKEND', 'json')}); employees={len(employees)}")


if __name__ == "__main__":
    main()
