#!/usr/bin/env python3
"""Administrative user management.

Usage:
    python scripts/manage_users.py list
    python scripts/manage_users.py delete <user-id>
"""

import argparse
import asyncio
import sys
from uuid import UUID

from reviewbot.application.usecase.user import DeleteUserUseCase, ListUsersUseCase
from reviewbot.application.usecase.user.delete_user import DeleteUserRequest
from reviewbot.config import Settings
from reviewbot.domain.error import NotFoundError
from reviewbot.util.di.container import create_container
from reviewbot.util.observability import configure_logfire


async def list_users() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ListUsersUseCase)
            result = await use_case.execute()
    finally:
        await container.close()

    for user in result.users:
        linked = ",".join(
            name
            for name, value in (("google", user.google_id), ("discord", user.discord_id))
            if value
        )
        print(f"{user.id}  {user.email}  origin={user.auth_provider.value}  linked={linked or '-'}")
    print(f"{result.total} user(s)")
    return 0


async def delete_user(user_id: UUID) -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(DeleteUserUseCase)
            result = await use_case.execute(DeleteUserRequest(user_id=user_id))
    except NotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    finally:
        await container.close()

    print(f"Deleted {result.user_id} ({result.sessions_revoked} session(s) revoked)")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage Review Bot users")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List all users")
    delete_parser = subparsers.add_parser("delete", help="Delete a user")
    delete_parser.add_argument("user_id", type=UUID)

    args = parser.parse_args()

    configure_logfire(Settings())

    if args.command == "list":
        return asyncio.run(list_users())
    return asyncio.run(delete_user(args.user_id))


if __name__ == "__main__":
    sys.exit(main())
