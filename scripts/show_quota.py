#!/usr/bin/env python3
"""
Show quota and bank data for the API key in GM_API_KEY.

Usage:
    python scripts/show_quota.py
    python scripts/show_quota.py --accounts
    python scripts/show_quota.py --account DE-1234 --player Steve
"""

import asyncio
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gmclient import GMClient, GMClientException, PrivateBearer
from gmclient.core.config import settings
from gmclient.core.logging import setup_logging


def describe_account(account) -> str:
    bearer = account.bearer
    if isinstance(bearer, PrivateBearer):
        owner = f"{bearer.player.player_name} ({bearer.player.uuid or 'uuid not loaded'})"
    elif bearer is not None:
        owner = bearer.name
    else:
        owner = "-"
    return (
        f"{account.account_number:<16} {account.account_type.value if account.account_type else '-':<12} "
        f"{account.balance if account.balance is not None else '-':>14}  {owner}"
    )


async def run(args) -> int:
    async with await GMClient.create(
        lazy_mode=args.lazy, debug_mode=args.debug or None
    ) as client:
        info = await client.get_api_info()
        print("=" * 60)
        print(f"Requests: {info.requests} / {info.limit} (remaining {info.remaining})")
        print(f"Outstanding costs: {info.outstanding_costs}")
        print("=" * 60)

        if args.accounts:
            for account in await client.bank().list_all():
                print(describe_account(account))

        if args.account:
            account = await client.bank(args.account)
            if not account.is_loaded:
                await account.load()
            print(describe_account(account))

        if args.player:
            player = await client.player().from_playername(args.player)
            print(f"{player.player_name}: {player.uuid}")

        print(f"\nRequests sent by this run: {client.local_request_count}")
    return 0


def main() -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Show GermanMiner API quota and bank data")
    parser.add_argument("--accounts", action="store_true", help="list all bank accounts")
    parser.add_argument("--account", help="show a single bank account")
    parser.add_argument("--player", help="resolve a player name to its UUID")
    parser.add_argument("--lazy", action="store_true", help="enable lazy mode")
    parser.add_argument("--debug", action="store_true", help="log requests and payloads")
    args = parser.parse_args()

    config = settings.model_copy(update={"log_level": "DEBUG"}) if args.debug else settings
    setup_logging(config)

    try:
        return asyncio.run(run(args))
    except GMClientException as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
