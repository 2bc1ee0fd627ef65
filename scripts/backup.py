"""Backup the configured store.

mysql: uses `mysqldump` (MySQL client tools must be installed).
json: copies the data files into backups/ with a timestamp.
"""

from __future__ import annotations

import importlib
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module


def backup_mysql(db: dict, out_dir: Path, ts: str) -> Path:
    out_file = out_dir / f"{db['database']}_{ts}.sql"
    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
    ]
    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools or back up with Workbench.")
    return out_file


def backup_json(data_dir: Path, file_names: list[str], out_dir: Path, ts: str) -> list[Path]:
    copied = []
    for name in file_names:
        src = data_dir / name
        if not src.exists():
            continue
        dst = out_dir / f"{src.stem}_{ts}{src.suffix}"
        shutil.copy2(src, dst)
        copied.append(dst)
    return copied


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")

    if str(getattr(settings, "STORAGE_BACKEND", "json")).lower() == "mysql":
        out_file = backup_mysql(settings.DB_CONFIG, out_dir, ts)
        print(f"OK: Backup created: {out_file}")
        return

    copied = backup_json(
        Path(settings.DATA_DIR),
        [settings.WORK_ENTRIES_FILE, settings.USERS_FILE],
        out_dir,
        ts,
    )
    if not copied:
        raise SystemExit(f"Nothing to back up in {settings.DATA_DIR}")
    for path in copied:
        print(f"OK: Backup created: {path}")


if __name__ == "__main__":
    main()
