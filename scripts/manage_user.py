#!/usr/bin/env python3
"""
Change a user's role or enable/disable the account.

Usage:
  python scripts/manage_user.py --email someone@example.com --role ADMIN
  python scripts/manage_user.py --email someone@example.com --deactivate
"""
from __future__ import annotations

import argparse
import sys

from revcart.db.models import UserRole
from revcart.db.session import unit_of_work
from revcart.repositories.sql_repository import SQLRepository
from revcart.services.activity_service import ActivityLogService


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Update role / active flag of a user")
    ap.add_argument("--email", required=True)
    ap.add_argument("--role", choices=[r.value for r in UserRole])
    state = ap.add_mutually_exclusive_group()
    state.add_argument("--activate", action="store_true")
    state.add_argument("--deactivate", action="store_true")
    args = ap.parse_args(argv)

    repo = SQLRepository()
    email = (args.email or "").strip()
    user = repo.find_user_by_email(email)
    if not user:
        raise SystemExit(f"User '{email}' not found")
    if not (args.role or args.activate or args.deactivate):
        raise SystemExit("Nothing to change: pass --role, --activate or --deactivate")

    activity = ActivityLogService(repo)
    with unit_of_work():
        if args.role:
            repo.update_user_role(email, UserRole(args.role))
            activity.log(user.id, "ROLE_CHANGED", {"email": email, "role": args.role})
        if args.activate or args.deactivate:
            repo.set_user_active(email, bool(args.activate))
            activity.log(user.id, "ACTIVATED" if args.activate else "DEACTIVATED", {"email": email})

    updated = repo.find_user_by_email(email)
    print("OK: user updated")
    print(f"  Email: {updated.email}")
    print(f"  Role: {updated.role.value}")
    print(f"  Active: {updated.active}")


if __name__ == "__main__":
    try:
        main()
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
