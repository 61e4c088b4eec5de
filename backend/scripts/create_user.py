"""
Create a user account directly in the database, bypassing self-registration.
This is how manager accounts are provisioned.

Run with: python -m scripts.create_user jane.doe@council.gov.uk Jane Doe --role manager
The password is read from the terminal unless --password is given.
"""

import argparse
import asyncio
import getpass
from sqlalchemy import select
from socialcare.database import async_session, engine, init_models
from socialcare.models.user import User
from socialcare.passwords import MIN_PASSWORD_LENGTH, hash_password


async def create_user(email: str, first_name: str, last_name: str, role: str, password: str) -> None:
    await init_models()
    try:
        await _insert_user(email, first_name, last_name, role, password)
    finally:
        await engine.dispose()


async def _insert_user(email: str, first_name: str, last_name: str, role: str, password: str) -> None:
    async with async_session() as db:
        email = email.strip().lower()
        existing = await db.scalar(select(User).where(User.email == email))
        if existing:
            print(f"Error: a user with email {email} already exists (id={existing.id}, role={existing.role}).")
            return

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=True,
        )
        db.add(user)
        await db.commit()
        print(f"Created {role} {first_name} {last_name} <{email}> with id {user.id}.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a Social Care 365 user account")
    parser.add_argument("email")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument("--role", choices=["caregiver", "manager"], default="caregiver")
    parser.add_argument("--password", help="Password (prompted for when omitted)")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        parser.error(f"password must be at least {MIN_PASSWORD_LENGTH} characters long")

    asyncio.run(create_user(args.email, args.first_name, args.last_name, args.role, password))
