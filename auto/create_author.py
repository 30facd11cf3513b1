#!/usr/bin/env python3
"""
Create Author Script.

Creates an author directly in the database and prints an access token for
calling the posts API locally. In production, users and tokens come from
the identity provider.

Usage:
    uv run python auto/create_author.py -u jane -e jane@example.com
    uv run python auto/create_author.py -u jane -e jane@example.com --token-only

Environment Variables:
    AUTHOR_USERNAME: Author username (default: author)
    AUTHOR_EMAIL: Author email (default: author@example.com)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from datetime import timedelta
from os import environ
from sys import exit as sys_exit
from traceback import print_exc

from app.db import init_db, transaction
from app.errors import DuplicateEntryError
from app.managers import create_access_token
from app.managers.token_manager import get_token_expiry
from app.models import UserDB
from app.repositories import UserRepository


@dataclass(frozen=True)
class AuthorData:
    """
    Author creation data.

    Attributes
    ----------
    username : str
        Unique username.
    email : str
        Unique email address.
    display_name : str | None
        Name shown in the admin panel.
    """

    username: str
    email: str
    display_name: str | None = None


async def create_author(author: AuthorData) -> UserDB:
    """
    Create an author, or return the existing one with the same username.

    Parameters
    ----------
    author : AuthorData
        Author data container.

    Returns
    -------
    UserDB
        Created or existing author.

    Raises
    ------
    DuplicateEntryError
        If the email is taken by a different username.
    """
    await init_db()
    async with transaction() as session:
        repo = UserRepository(session)
        if existing := await repo.get_by_username(author.username):
            return existing
        return await repo.create(author.username, author.email, author.display_name)


def parse_args() -> Namespace:
    """
    Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments with defaults applied.
    """
    parser = ArgumentParser(
        description="Create an author and print an access token.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run python auto/create_author.py -u jane -e jane@example.com -n "Jane Doe"
  uv run python auto/create_author.py -u jane -e jane@example.com --minutes 1440
        """,
    )
    parser.add_argument(
        "-u",
        "--username",
        default=environ.get("AUTHOR_USERNAME", "author"),
        help="Author username (default: author or AUTHOR_USERNAME env var)",
    )
    parser.add_argument(
        "-e",
        "--email",
        default=environ.get("AUTHOR_EMAIL", "author@example.com"),
        help="Author email (default: author@example.com or AUTHOR_EMAIL env var)",
    )
    parser.add_argument("-n", "--display-name", default=None, help="Display name")
    parser.add_argument(
        "-m",
        "--minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    parser.add_argument(
        "--token-only",
        "-t",
        action="store_true",
        help="Print only the access token",
    )
    return parser.parse_args()


async def main() -> int:
    """
    Run the author creation process.

    Returns
    -------
    int
        Exit code (0 for success, 1 for error).
    """
    args = parse_args()
    author_data = AuthorData(
        username=args.username,
        email=args.email,
        display_name=args.display_name,
    )

    try:
        author = await create_author(author_data)
    except DuplicateEntryError as e:
        print(f"\n❌ Error: {e}")
        return 1
    except Exception as e:  # noqa: BLE001
        print(f"\n❌ Unexpected error: {e}")
        print_exc()
        return 1

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_access_token(author.uuid, author.username, expires_delta=expires)

    if args.token_only:
        print(token)
        return 0

    print("\n✅ Author ready!")
    print(f"   UUID:     {author.uuid}")
    print(f"   Username: {author.username}")
    print(f"   Email:    {author.email}")
    if expiry := get_token_expiry(token):
        print(f"   Token expires: {expiry:%Y-%m-%d %H:%M:%S %Z}")
    print("\nList your posts with:")
    print("  curl 'http://localhost:8000/posts?postType=draft' \\")
    print(f"    -H 'Authorization: Bearer {token}'")
    return 0


if __name__ == "__main__":
    sys_exit(asyncio_run(main()))
