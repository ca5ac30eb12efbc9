"""
Admin account seeding.

Admins are never created through the API. Usage:

    python -m hostelcare.db.seed --username warden --password secret --hostel Sahyadri
"""
import argparse
import sys
from typing import Optional

from sqlalchemy.orm import Session

from hostelcare.config.settings import settings
from hostelcare.core.exceptions import BaseAppException, ConflictError, ValidationError
from hostelcare.core.logging import get_logger, setup_logging
from hostelcare.core.security import PasswordHasher, get_password_hasher
from hostelcare.models.base.enums import UserRole
from hostelcare.models.user import User
from hostelcare.repositories.user_repository import UserRepository

logger = get_logger(__name__)


def create_admin(
    db: Session,
    username: str,
    password: str,
    hostel_name: str,
    password_hasher: Optional[PasswordHasher] = None,
) -> User:
    """
    Create an ADMIN user for one hostel.

    Raises:
        ValidationError: If a field is missing or the hostel is not in the roster
        ConflictError: If the username is already taken in that hostel
    """
    if not username or not password:
        raise ValidationError("username and password are required")
    if not settings.is_known_hostel(hostel_name):
        raise ValidationError(f"Unknown hostel: {hostel_name}")

    users = UserRepository(db, hostel_name)
    if users.find_admin(username) is not None:
        raise ConflictError(f"Admin {username} already exists in {hostel_name}")

    hasher = password_hasher or get_password_hasher()
    admin = users.create(
        User(
            username=username,
            password_hash=hasher.hash(password),
            role=UserRole.ADMIN,
        )
    )
    logger.info(f"Admin {username} created for {hostel_name}")
    return admin


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create a hostel admin account")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--hostel", required=True, choices=settings.HOSTEL_ROSTER)
    args = parser.parse_args(argv)

    setup_logging()

    from hostelcare.db.init_db import init_db
    from hostelcare.db.session import SessionLocal

    init_db()
    db = SessionLocal()
    try:
        create_admin(db, args.username, args.password, args.hostel)
    except BaseAppException as e:
        logger.error(f"Admin account not created: {e.message}")
        return 1
    finally:
        db.close()

    print(f"Admin account {args.username} created for {args.hostel}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
