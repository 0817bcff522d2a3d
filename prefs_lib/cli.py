"""Command line interface for the preferences store.

Examples:

    prefs --app com.example.App list
    prefs --app com.example.App --context settings set theme '"dark"'
    prefs --app com.example.App --context settings show
    prefs serve --port 8000

Values given to `set` are parsed as JSON when possible and stored as plain
strings otherwise.
"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

from prefs_lib.config import Config, load_config
from prefs_lib.errors import PreferencesError, SerializationError
from prefs_lib.logging_config import configure_logging
from prefs_lib.preferences import PreferencesStore
from prefs_lib.storage import create_backend

import logging
logger = logging.getLogger(__name__)


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="prefs", description="Inspect and edit stored preferences")
    p.add_argument("--config", type=Path, help="YAML configuration file")
    p.add_argument("--app", dest="application_name", help="Application name (e.g. com.example.App)")
    p.add_argument("--context", dest="context_name", help="Context name (default: defaultPreferences)")
    p.add_argument("--backend", choices=("file", "remote"), help="Storage backend")
    p.add_argument("--home", dest="home_dir", help="Home directory for the file backend")
    p.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("path", help="Print the resource name of the context")
    sub.add_parser("list", help="List the stored contexts of the application")
    sub.add_parser("show", help="Print the stored content of the context")
    get_p = sub.add_parser("get", help="Print the value of a key")
    get_p.add_argument("key")
    set_p = sub.add_parser("set", help="Set a key and save the context")
    set_p.add_argument("key")
    set_p.add_argument("value")
    rm_p = sub.add_parser("remove", help="Remove a key and save the context")
    rm_p.add_argument("key")
    sub.add_parser("delete", help="Delete the stored context")
    serve_p = sub.add_parser("serve", help="Run the preferences HTTP server")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    return parser.parse_args(argv)


def parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def build_config(args: argparse.Namespace) -> Config:
    cfg = load_config(args.config)
    for name in ("application_name", "context_name", "backend", "home_dir", "log_level"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(cfg, name, value)
    return cfg


def open_store(cfg: Config) -> PreferencesStore:
    store = PreferencesStore(create_backend(cfg.backend, **cfg.backend_options()), cfg.application_name)
    store.context_name = cfg.context_name
    return store


def _load_existing(store: PreferencesStore) -> None:
    if store.exists():
        store.load()


def run(args: argparse.Namespace, out=None) -> int:
    out = out or sys.stdout
    cfg = build_config(args)

    if args.command == "serve":
        import uvicorn
        from prefs_lib.server import create_app

        uvicorn.run(create_app(cfg), host=args.host or cfg.host, port=args.port or cfg.port)
        return 0

    store = open_store(cfg)
    if args.command == "path":
        print(store.context_resource_name, file=out)
        return 0
    if not store.initialized:
        print(f"preferences storage not available: {store.init_status.diagnostic}", file=sys.stderr)
        return 1

    if args.command == "list":
        contexts = store.list_contexts()
        if contexts is None:
            print(f"no preferences stored for {store.application_name}", file=sys.stderr)
            return 1
        for name in contexts:
            print(name, file=out)
    elif args.command == "show":
        if not store.exists():
            print(f"context {store.context_name} not found", file=sys.stderr)
            return 1
        print(store.dump(), file=out)
    elif args.command == "get":
        _load_existing(store)
        if args.key not in store:
            print(f"key {args.key} not set", file=sys.stderr)
            return 1
        print(json.dumps(store.get(args.key)), file=out)
    elif args.command == "set":
        _load_existing(store)
        store.put(args.key, parse_value(args.value))
        store.save()
    elif args.command == "remove":
        _load_existing(store)
        store.remove(args.key)
        store.save()
    elif args.command == "delete":
        if not store.delete():
            print(f"context {store.context_name} not found", file=sys.stderr)
            return 1
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.config, level=args.log_level)
    try:
        return run(args)
    except SerializationError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except PreferencesError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
