"""Create the demo account (demo@ponto.local / demo123) if it is missing."""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.ponto_system.ponto_system.database.bootstrap import DEMO_USERS, ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(db_config)
    print(f"OK: demo users ready ({', '.join(u[1] for u in DEMO_USERS)}) -> {db_config.get('database')}")


if __name__ == "__main__":
    main()
