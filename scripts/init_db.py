from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

from rollcall.config import load_settings
from rollcall.store.bootstrap import apply_schema, list_tables
from rollcall.store.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    cfg = conn.config
    print(f"OK: Applied schema.sql -> {cfg.user}@{cfg.host}:{cfg.port}/{cfg.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
