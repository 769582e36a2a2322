from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.uniattend.uniattend.common.logging_config import setup_logging
from src.uniattend.uniattend.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users
from src.uniattend.uniattend.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = DBConfig.from_dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    print(f"OK: Seeded database -> {db_config.describe()}")
    for unique_id, _name, password, role, _dept in DEMO_USERS:
        print(f"  {role:<16} {unique_id} / {password}")


if __name__ == "__main__":
    main()
