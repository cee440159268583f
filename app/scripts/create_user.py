"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import session_scope
from app.core.errors import AccountError
from app.core.tokens import TokenConfig, TokenIssuer
from app.models import UserRole
from app.services.account_store import AccountStore
from app.services.accounts import AccountService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a portfolio user account.")
    parser.add_argument("username", help="Username (3-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.common.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")

    with session_scope() as db:
        service = AccountService(
            AccountStore(db),
            TokenIssuer(TokenConfig.from_settings(settings)),
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
        try:
            result = service.register(args.username, args.email, args.password, role=args.role)
        except AccountError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(
            f"Created user '{result.user.username}' <{result.user.email}> "
            f"with role '{result.user.role}' (id={result.user.id})."
        )
        return 0


if __name__ == "__main__":
    sys.exit(main())
