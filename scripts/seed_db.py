from __future__ import annotations

from dotenv import load_dotenv

from rollcall.config import load_settings
from rollcall.container import build_store
from rollcall.store.bootstrap import DEMO_ACCOUNTS, ensure_demo_accounts


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    store = build_store(settings)

    seeded = ensure_demo_accounts(store)
    for _, email, password, _, role, _ in DEMO_ACCOUNTS:
        print(f"  {role.value:<9} {email} / {password}")
    print(f"OK: Seeded {len(seeded)} demo accounts ({settings.STORE_BACKEND})")


if __name__ == "__main__":
    main()
