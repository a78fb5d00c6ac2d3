"""CLI entry point for the city weather viewer."""

import argparse
import asyncio
import logging
import sqlite3
from datetime import date

from cityweather.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from cityweather.config.schema import AppConfig
from cityweather.ingest.errors import MissingCredentialsError
from cityweather.models.forecast import DateWindow, ViewMode
from cityweather.pipeline.chart_slot import TextChart
from cityweather.pipeline.weather_view import build_view
from cityweather.reporting.formatters import format_view_json, format_view_text
from cityweather.storage.database import open_database
from cityweather.storage.location_cache import LocationCache, SqliteStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cityweather",
        description="Current conditions and forecast for a city",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")

    sub = parser.add_subparsers(dest="command")

    # show
    show_p = sub.add_parser("show", help="Show weather for a city id")
    show_p.add_argument("city_id", help="GeoDB city id, e.g. Q2807")
    show_p.add_argument("--start", type=date.fromisoformat, help="Window start YYYY-MM-DD")
    show_p.add_argument("--end", type=date.fromisoformat, help="Window end YYYY-MM-DD")
    show_p.add_argument(
        "--mode", choices=[m.value for m in ViewMode], help="Override view mode"
    )
    show_p.add_argument("--json", action="store_true", help="Print the view as JSON")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    # cache list
    cache_p = sub.add_parser("cache", help="Location cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("list", help="List cached locations")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "cache":
        return _cmd_cache(config, args)
    else:
        parser.print_help()
        return 1


def _open_db(config: AppConfig, args) -> sqlite3.Connection:
    return open_database(args.db or config.cache.db_path)


def _cmd_show(config: AppConfig, args) -> int:
    if (args.start is None) != (args.end is None):
        print("Error: --start and --end must be given together")
        return 1
    window = None
    if args.start is not None:
        window = DateWindow.from_dates(args.start, args.end)

    conn = _open_db(config, args)
    try:
        mode = ViewMode(args.mode) if args.mode else None
        try:
            view = build_view(config, conn, TextChart, mode=mode)
        except MissingCredentialsError as e:
            print(f"Error: {e}")
            return 1

        try:
            state = asyncio.run(view.load(args.city_id, window)) or view.state
            chart = view.chart
            chart_text = chart.render() if isinstance(chart, TextChart) else ""
        finally:
            view.close()

        if args.json:
            print(format_view_json(state))
        else:
            print(format_view_text(state, chart_text))
        return 1 if state.error else 0
    finally:
        conn.close()


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        if args.config is None:
            print("Error: config set needs --config PATH to write to")
            return 1
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            save_config(new_config, args.config)
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_cache(config: AppConfig, args) -> int:
    if args.cache_command != "list":
        print("Use: cache list")
        return 1
    conn = _open_db(config, args)
    try:
        cache = LocationCache(SqliteStore(conn), key_prefix=config.cache.key_prefix)
        records = cache.entries()
        print(f"Cached locations: {len(records)}")
        for r in records:
            print(f"  {r.id}: {r.display_name} ({r.latitude:.4f}, {r.longitude:.4f})")
        return 0
    finally:
        conn.close()
