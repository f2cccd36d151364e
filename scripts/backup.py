"""Snapshot the attendee store.

Writes the configured store (json or mysql backend) as a timestamped JSON file
under `backups/`, in the same shape as db.json so it can be restored by copying
it over DB_FILE.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.checkin_desk.checkin_desk.container import build_repository
from src.checkin_desk.checkin_desk.core.exceptions import StoreError


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    repo = build_repository(
        store_backend=getattr(settings, "STORE_BACKEND", "json"),
        db_file=getattr(settings, "DB_FILE", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"checkin_db_{ts}.json"

    try:
        records = repo.load_all()
    except StoreError as e:
        raise SystemExit(f"Backup failed: {e}")

    out_file.write_text(json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file} ({len(records)} records)")


if __name__ == "__main__":
    main()
