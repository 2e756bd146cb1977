"""Provision the site owner's account.

GitHub logins are only accepted for emails that already belong to a user,
so the owner row has to exist before the first sign-in.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError as PydanticValidationError

from portfolio.database import AsyncSessionLocal, engine, init_db
from portfolio.schemas.auth import OwnerCreate
from portfolio.services.users import provision_owner


async def _create(data: OwnerCreate, migrate: bool) -> int:
    if migrate:
        await init_db()

    async with AsyncSessionLocal() as db:
        user = await provision_owner(db, data)
    await engine.dispose()

    print(f"Owner {user.email} ready (id={user.id})")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or update the owner account")
    parser.add_argument("--email", required=True, help="Verified GitHub email of the owner")
    parser.add_argument("--name", required=True, help="Display name")
    parser.add_argument("--avatar", default=None, help="Avatar URL (refreshed on login)")
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Run migrations to head before provisioning",
    )
    args = parser.parse_args()

    try:
        data = OwnerCreate(email=args.email, name=args.name, avatar=args.avatar)
    except PydanticValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error.get("loc", ()))
            print(f"{field}: {error.get('msg')}", file=sys.stderr)
        return 1

    return asyncio.run(_create(data, args.migrate))


if __name__ == "__main__":
    raise SystemExit(main())
