"""
Create a user (e.g. the first admin; registration only creates role 'user').
Run from project root:
  python -m blogapi.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m blogapi.scripts.create_user admin admin@example.com your-password admin
"""
import argparse
import sys

from blogapi.core.database import SessionLocal, init_db
from blogapi.core.errors import BlogError
from blogapi.core.security import get_password_hasher
from blogapi.models.user import ROLE_USER, ROLES
from blogapi.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a blog user from the command line.")
    parser.add_argument("username", help="Username (unique)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (6-50 chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLES))
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        user = create_user(
            db, args.username, args.email, args.password, get_password_hasher(), role=args.role
        )
    except BlogError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.username}' <{user.email}> with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
