from __future__ import annotations

import argparse
import asyncio
import logging

from dexpaprika.client import DexPaprikaClient
from dexpaprika.config import load_config
from dexpaprika.formatting import describe_error, format_pair, format_volume
from dexpaprika.http import RequestError
from dexpaprika.models import Pool, SearchResult


def _format_pool(pool: Pool) -> str:
    symbols = [token.symbol for token in pool.tokens if token.symbol]
    pair = format_pair(symbols[0], symbols[1]) if len(symbols) >= 2 else pool.id
    return f"{pair} [{pool.dex_name} on {pool.chain}] volume {format_volume(pool.volume_usd)}"


def _format_search(result: SearchResult) -> list[str]:
    lines = [f"token: {token.symbol} {token.name} ({token.chain})" for token in result.tokens]
    lines.extend(f"pool: {_format_pool(pool)}" for pool in result.pools)
    lines.extend(f"dex: {dex.name} ({dex.chain})" for dex in result.dexes)
    return lines


async def _run(args: argparse.Namespace) -> list[str]:
    async with DexPaprikaClient(load_config()) as client:
        if args.command == "networks":
            networks = await client.networks.list()
            return [f"{network.id}: {network.display_name}" for network in networks]
        if args.command == "stats":
            stats = await client.stats.get_stats()
            return [
                f"chains: {stats.chains}",
                f"factories: {stats.factories}",
                f"pools: {stats.pools}",
                f"tokens: {stats.tokens}",
            ]
        if args.command == "search":
            result = await client.search.search(" ".join(args.query))
            return _format_search(result)
        if args.network:
            page = await client.pools.list_by_network(args.network, limit=args.limit)
        else:
            page = await client.pools.list(limit=args.limit)
        return [_format_pool(pool) for pool in page.pools]


def main() -> None:
    parser = argparse.ArgumentParser(description="Query the DexPaprika API.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("networks", help="List supported networks")
    commands.add_parser("stats", help="Show ecosystem statistics")
    search_parser = commands.add_parser("search", help="Search tokens, pools and DEXes")
    search_parser.add_argument("query", nargs="+", help="Search term")
    pools_parser = commands.add_parser("pools", help="List top pools")
    pools_parser.add_argument("--network", help="Restrict to one network")
    pools_parser.add_argument("--limit", type=int, default=10, help="Number of pools")
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        lines = asyncio.run(_run(args))
    except (RequestError, ValueError) as exc:
        parser.exit(1, f"error: {describe_error(exc)}\n")
    print("\n".join(lines))


if __name__ == "__main__":
    main()
