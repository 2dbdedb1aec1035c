"""Utility script to issue a bearer token for an identity."""

from __future__ import annotations

import argparse
from datetime import timedelta

from luxurystay.domain.entities import ROLE_ADMIN
from luxurystay.infrastructure.security import create_identity_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token issuance."""

    parser = argparse.ArgumentParser(
        description="Issue an access token for the LuxuryStay notification API.",
    )
    parser.add_argument("identity_id", help="Identifier placed in the 'sub' claim")
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        help="Role of the identity (default: admin)",
    )
    parser.add_argument(
        "--name",
        default="",
        help="Display name placed in the 'name' claim (optional)",
    )
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    return parser.parse_args()


def main() -> None:
    """Print a token for the identity given on the command line."""

    args = parse_args()
    if not args.identity_id.strip():
        raise SystemExit("An identity id is required.")
    if args.expires_minutes is not None and args.expires_minutes <= 0:
        raise SystemExit("--expires-minutes must be positive.")

    expires = timedelta(minutes=args.expires_minutes) if args.expires_minutes else None
    token = create_identity_token(
        args.identity_id.strip(), args.role, args.name, expires_delta=expires
    )
    print(token)


if __name__ == "__main__":
    main()
