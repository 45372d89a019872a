"""Utility script to seed roles and create an initial user in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from sjfulfillment.application.use_cases.users import create_user
from sjfulfillment.domain.entities import ALL_ROLES, Merchant, UserRole
from sjfulfillment.domain.errors import NotFoundError, ValidationError
from sjfulfillment.infrastructure.database import SessionLocal, initialize_database
from sjfulfillment.infrastructure.repositories import MerchantRepository, RoleRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the SJFulfillment API.",
    )
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Full name of the user (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address of the user (default: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default=UserRole.SJFS_ADMIN.value,
        choices=[role.value for role in ALL_ROLES],
        help="Role alias assigned to the user (default: SJFS_ADMIN)",
    )
    parser.add_argument(
        "--merchant-name",
        default=None,
        help="Create a merchant with this business name and attach the user to it.",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def seed_roles(session) -> None:
    repository = RoleRepository(session)
    for role in ALL_ROLES:
        repository.get_or_create(
            alias=role.value, name=role.value.replace("_", " ").title()
        )


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("User password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        seed_roles(session)
        merchant_id = None
        if args.merchant_name:
            merchant = MerchantRepository(session).create(
                Merchant(id=None, business_name=args.merchant_name, is_active=True)
            )
            merchant_id = merchant.id
        user = create_user(
            session,
            name=args.name,
            role=args.role,
            email=args.email,
            password=password,
            merchant_id=merchant_id,
        )
    except (ValidationError, NotFoundError) as exc:
        session.rollback()
        raise SystemExit(f"Could not create user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role.alias}\n"
            f"  Merchant: {user.merchant_id or '-'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
