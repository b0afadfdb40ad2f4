from __future__ import annotations

import argparse
import json
import logging
import sys
from contextlib import contextmanager
from typing import Iterator

from data_accounting.merkle.hasher import Hasher
from data_accounting.results import ConfigurationError, Failure
from data_accounting.utils.logging_config import resolve_level, setup_logging


def _cmd_hash(args: argparse.Namespace) -> int:
    result = Hasher().hash_file(args.path)
    if isinstance(result, Failure):
        print(f"ERROR: {result.message}", file=sys.stderr)
        return 1
    print(result.value)
    return 0


@contextmanager
def _settings_repository_scope() -> Iterator["DBSettingsRepository"]:
    from data_accounting.db import DBSettingsRepository, create_session

    with create_session() as session:
        yield DBSettingsRepository(session)


def _config_store():
    from data_accounting.config import ConfigStore

    return ConfigStore(_settings_repository_scope)


def _cmd_config_show(args: argparse.Namespace) -> int:
    config = _config_store().get_config()
    print(json.dumps(config.as_dict(), indent=2, sort_keys=True))
    return 0


def _cmd_config_set(args: argparse.Namespace) -> int:
    try:
        value = json.loads(args.value)
    except ValueError:
        value = args.value

    config = _config_store().get_config()
    try:
        config.set(args.name, value)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    print(f"{args.name} = {json.dumps(value)}")
    return 0


def _cmd_init_db(args: argparse.Namespace) -> int:
    from data_accounting.db.init_db import migrate, reset_db

    if args.reset:
        reset_db()
    else:
        migrate()
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    from data_accounting.db import DBMerkleTreeStore, create_session
    from data_accounting.merkle import verify_inclusion

    with create_session() as session:
        report = verify_inclusion(DBMerkleTreeStore(session), Hasher(), args.witness_event_id, args.leaf)

    for node in report.path:
        print(f"  depth {node.depth}: {node.left_leaf[:16]}.. + {node.right_leaf[:16]}.. -> {node.successor[:16]}..")
    if report.verified:
        print(f"PASS: {args.leaf[:16]}.. is included under root {report.recorded_root}")
        return 0
    print(f"FAIL: {report.reason}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="data-accounting", description="Data accounting verification CLI")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command")

    hash_parser = subparsers.add_parser("hash", help="Print the verification hash of a file")
    hash_parser.add_argument("path")
    hash_parser.set_defaults(handler=_cmd_hash)

    config_parser = subparsers.add_parser("config", help="Show or change verification settings")
    config_sub = config_parser.add_subparsers(dest="config_command")
    show_parser = config_sub.add_parser("show", help="Print the merged settings")
    show_parser.set_defaults(handler=_cmd_config_show)
    set_parser = config_sub.add_parser("set", help="Persist a setting override")
    set_parser.add_argument("name")
    set_parser.add_argument("value", help="JSON value; plain strings are accepted as-is")
    set_parser.set_defaults(handler=_cmd_config_set)

    init_parser = subparsers.add_parser("init-db", help="Create or migrate the database schema")
    init_parser.add_argument("--reset", action="store_true", help="Drop all tables first")
    init_parser.set_defaults(handler=_cmd_init_db)

    verify_parser = subparsers.add_parser("verify", help="Walk a leaf up to its witness event root")
    verify_parser.add_argument("witness_event_id")
    verify_parser.add_argument("leaf", help="Leaf digest (page or file verification hash)")
    verify_parser.set_defaults(handler=_cmd_verify)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 1

    setup_logging(resolve_level(args.log_level, fallback=logging.WARNING))
    return handler(args)


def entrypoint() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    entrypoint()
