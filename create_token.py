"""Print an access token for a user id, for manual API calls.

Usage:
    python create_token.py <user_id> [--days 365]
"""
import argparse

from skill_exchange_api.app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id")
    parser.add_argument("--days", type=int, default=365, help="token lifetime in days")
    args = parser.parse_args()
    print(create_access_token({"sub": args.user_id}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
