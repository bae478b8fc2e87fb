"""MySQL backend maintenance.

    python scripts/db.py init    # apply database/schema.sql
    python scripts/db.py seed    # add the sample employee directory
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.iakwe_hr.iakwe_hr.database.bootstrap import apply_schema, list_tables, seed_sample_employees


def _target(db_config: dict) -> str:
    return f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("command", choices=["init", "seed"])
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if args.command == "init":
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        print(f"OK: schema applied -> {_target(db_config)} (tables: {', '.join(list_tables(db_config))})")
    else:
        added = seed_sample_employees(db_config)
        print(f"OK: {added} sample employee(s) added -> {_target(db_config)}")


if __name__ == "__main__":
    main()
