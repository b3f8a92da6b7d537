"""Command line surface: issue, validate and show a stored token.

Usage::

    fingerprint-token new [--days N]    create/overwrite the stored token
    fingerprint-token validate          validate against the demo fingerprint
    fingerprint-token validate --loose  validate expiry only
    fingerprint-token show              print the stored token
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Mapping, Optional

from .config import TokenConfig
from .demo import EXAMPLE_FINGERPRINT
from .storage import TokenStore, create_store_from_env
from .token import TokenIssuer, TokenVerifier


def _dump(record: Mapping[str, Any]) -> str:
    return json.dumps(record, indent=2)


def _days(raw: str) -> float:
    value = float(raw)
    return int(value) if value.is_integer() else value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fingerprint-token", description="Issue and validate fingerprint-bound tokens.")
    sub = parser.add_subparsers(dest="command")

    new = sub.add_parser("new", help="create a token against the demo fingerprint and store it")
    new.add_argument("--days", type=_days, default=None, help="validity window in days")

    validate = sub.add_parser("validate", help="validate the stored token")
    validate.add_argument("--loose", action="store_true", help="check expiry only, ignore the fingerprint")

    sub.add_parser("show", help="print the stored token")
    return parser


async def _cmd_new(store: TokenStore, snapshot: Any, days: float) -> int:
    record = TokenIssuer(days_valid=days).issue(snapshot)
    await store.save(record.to_dict())
    print(f"Created new UUID token ({days:g}-day validity):")
    print(_dump(record.to_dict()))
    return 0


async def _cmd_validate(store: TokenStore, snapshot: Any, loose: bool) -> int:
    token = await store.load()
    if token is None:
        print("No token found. Run: fingerprint-token new", file=sys.stderr)
        return 1

    result = TokenVerifier().verify(token, None if loose else snapshot)
    print("VALID" if result.valid else f"INVALID ({result.reason})")
    if not result.valid:
        print("Stored token:")
        print(_dump(token))
        if not loose:
            print("Tip: try loose validation with: fingerprint-token validate --loose")
    return 0


async def _cmd_show(store: TokenStore) -> int:
    token = await store.load()
    print(_dump(token) if token is not None else "(no store)")
    return 0


async def run(args: argparse.Namespace, config: TokenConfig, store: TokenStore, snapshot: Any) -> int:
    try:
        if args.command == "new":
            days = config.days_valid if args.days is None else args.days
            return await _cmd_new(store, snapshot, days)
        if args.command == "validate":
            return await _cmd_validate(store, snapshot, args.loose)
        return await _cmd_show(store)
    finally:
        await store.close()


def main(
    argv: Optional[List[str]] = None,
    *,
    config: Optional[TokenConfig] = None,
    store: Optional[TokenStore] = None,
    snapshot: Any = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    snapshot = EXAMPLE_FINGERPRINT if snapshot is None else snapshot
    try:
        config = config or TokenConfig.from_env()
        logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
        store = store or create_store_from_env(config)
        return asyncio.run(run(args, config, store, snapshot))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
