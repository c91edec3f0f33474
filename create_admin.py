#!/usr/bin/env python3
"""Create an admin user for the registration dashboard"""

import argparse
import getpass
import logging
import sys

from app import crud
from app.core.config import settings
from app.db.database import SessionLocal, init_db

logger = logging.getLogger("create_admin")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--username", default=settings.DEFAULT_ADMIN_USERNAME)
    parser.add_argument("--email", default=settings.DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--full-name", default=settings.DEFAULT_ADMIN_FULL_NAME)
    parser.add_argument("--role", default="super_admin", choices=["super_admin", "admin", "viewer"])
    parser.add_argument(
        "--password",
        default=settings.DEFAULT_ADMIN_PASSWORD,
        help="Defaults to DEFAULT_ADMIN_PASSWORD; prompted for when neither is set",
    )
    return parser.parse_args(argv)


def create_admin(username: str, email: str, password: str, full_name: str, role: str) -> bool:
    """Insert the admin unless one with the same username or email exists"""
    init_db()
    db = SessionLocal()

    try:
        existing_admin = crud.admin_user.get_by_username_or_email(db, username=username, email=email)
        if existing_admin:
            logger.info(f"Admin already exists: {existing_admin.username} <{existing_admin.email}>")
            return False

        admin = crud.admin_user.create_admin(
            db,
            username=username,
            email=email,
            password=password,
            full_name=full_name,
            role=role,
        )
        logger.info(f"Admin created: {admin.username} <{admin.email}>")
        return True
    finally:
        db.close()


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = parse_args(argv)

    password = args.password or getpass.getpass("Admin password: ")
    if not password:
        logger.error("A password is required")
        return 1

    create_admin(args.username, args.email, password, args.full_name, args.role)
    return 0


if __name__ == "__main__":
    sys.exit(main())
