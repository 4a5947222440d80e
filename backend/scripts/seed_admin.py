#!/usr/bin/env python3
"""Create the first admin account, or reset an existing admin's password.

Reads DATABASE_URL like the API does.

Usage:
  python scripts/seed_admin.py --email ops@argan.example --name "Ops" --password 'StrongPass123'
  python scripts/seed_admin.py --email ops@argan.example --password 'NewPass123' --reset-password
"""

import argparse
import asyncio
import sys

from sqlalchemy import select

from argan_hr.config import get_settings
from argan_hr.core.domain_types import AdminRole
from argan_hr.core.validation import is_valid_email, normalize_email, password_strength_errors
from argan_hr.db.session import create_session_factory
from argan_hr.infrastructure.passwords import hash_password
from argan_hr.models.admin import Admin


async def seed(email: str, name: str | None, password: str, role: str, reset: bool) -> int:
    factory = create_session_factory(get_settings().database_url)
    try:
        return await _seed(factory, email, name, password, role, reset)
    finally:
        await factory.kw["bind"].dispose()


async def _seed(factory, email: str, name: str | None, password: str, role: str, reset: bool) -> int:
    async with factory() as db:
        existing = await db.scalar(select(Admin).where(Admin.email == email))
        if existing and not reset:
            print(f"[ERROR] Admin '{email}' already exists. Use --reset-password to change it.")
            return 2
        if existing:
            existing.password_hash = hash_password(password)
            existing.is_active = True
            existing.failed_login_attempts = 0
            existing.locked_until = None
            await db.commit()
            print(f"[OK] Password reset for '{email}'.")
            return 0
        if reset:
            print(f"[ERROR] No admin with email '{email}'.")
            return 2
        db.add(Admin(
            email=email,
            name=name or email.split("@")[0],
            password_hash=hash_password(password),
            role=role,
            is_active=True,
        ))
        await db.commit()
    print(f"[OK] Created admin '{email}' with role '{role}'.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed or reset an Argan HR admin")
    parser.add_argument("--email", required=True, help="Admin email")
    parser.add_argument("--name", help="Display name (defaults to the email local part)")
    parser.add_argument("--password", required=True, help="Admin password")
    parser.add_argument(
        "--role", default=AdminRole.SUPER_ADMIN.value,
        choices=[r.value for r in AdminRole], help="Role",
    )
    parser.add_argument(
        "--reset-password", action="store_true",
        help="Reset the password of an existing admin instead of creating one",
    )
    args = parser.parse_args()

    email = normalize_email(args.email or "")
    if not is_valid_email(email):
        print("[ERROR] A valid email address is required.")
        return 2
    problems = password_strength_errors(args.password or "")
    if problems:
        print(f"[ERROR] {' '.join(problems)}")
        return 2

    try:
        return asyncio.run(seed(email, args.name, args.password, args.role, args.reset_password))
    except Exception as exc:
        print(f"[ERROR] Failed to seed admin: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
