"""
ETAPilot CLI

Command-line interface for holiday lookup, config validation/migration
and delivery previews.

Usage:
    etapilot holidays GB 2025
    etapilot countries
    etapilot validate config.json
    etapilot migrate config.json --profile-id default
    etapilot preview --config config.json --settings settings.yaml \\
        --handle blue-shirt --tag sale --now 2025-01-13T10:00
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any, Optional

from . import __version__
from .calendars import format_iso, get_definition, get_holiday_names, list_countries
from .config import (
    ConfigLoader,
    active_rules,
    migrate_to_v2,
)
from .engine import DeliveryEngine
from .exceptions import ETAPilotError
from .models import GlobalSettings, ProductDescriptor, StockStatus


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_countries(args: argparse.Namespace) -> int:
    """List supported holiday countries."""
    for code, name in list_countries():
        print(f"{code}  {name}")
    return 0


def cmd_holidays(args: argparse.Namespace) -> int:
    """Print a country's holidays for a year."""
    definition = get_definition(args.country)
    if definition is None:
        print(f"Unknown country code: {args.country}", file=sys.stderr)
        return 1

    holidays = get_holiday_names(args.country, args.year)
    if args.json:
        _print_json({
            "country": definition.code,
            "year": args.year,
            "holidays": [{"date": format_iso(d), "name": n} for d, n in holidays],
        })
        return 0

    print(f"{definition.name} ({definition.code}) {args.year}")
    print("-" * 40)
    for d, name in holidays:
        print(f"  {format_iso(d)}  {d.strftime('%a')}  {name}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a config file."""
    config = ConfigLoader().load_config(args.config)
    if config.is_v2:
        rule_count = sum(len(p.rules) for p in config.profiles)
        print(
            f"OK: version 2, {len(config.profiles)} profile(s), {rule_count} rule(s)"
        )
    else:
        print(f"OK: version 1, {len(config.rules)} rule(s)")
    return 0


def cmd_migrate(args: argparse.Namespace) -> int:
    """Migrate a config file to version 2 and print it as JSON."""
    config = migrate_to_v2(ConfigLoader().load_config(args.config), args.profile_id)
    output = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        print(f"Wrote {args.output}")
    else:
        print(output)
    return 0


def _preview_now(engine: DeliveryEngine, value: Optional[str]) -> datetime:
    """
    Wall-clock time for a preview.

    A naive --now is taken as shop-local time; an offset-aware one is
    converted to the shop's timezone.
    """
    if not value:
        return engine.now()
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed
    return engine.now(parsed)


def cmd_preview(args: argparse.Namespace) -> int:
    """Show the delivery preview for a product."""
    loader = ConfigLoader()
    config = loader.load_config(args.config)
    settings = loader.load_settings(args.settings) if args.settings else GlobalSettings()

    engine = DeliveryEngine(settings, strict=args.strict)
    now = _preview_now(engine, args.now)
    product = ProductDescriptor(
        handle=args.handle,
        tags=frozenset(args.tag or []),
        stock_status=StockStatus(args.stock_status) if args.stock_status else None,
    )

    preview = engine.preview(product, active_rules(config), now)
    if preview is None:
        print(f"No rule matches product {args.handle!r}")
        return 0

    if args.json:
        _print_json({
            "rule": {"id": preview.rule.id, "name": preview.rule.name},
            "now": now.isoformat(timespec="minutes"),
            "shipment_date": format_iso(preview.estimate.shipment_date),
            "delivery_min": format_iso(preview.estimate.delivery_min),
            "delivery_max": format_iso(preview.estimate.delivery_max),
            "arrival": preview.estimate.arrival_text,
            "express": preview.estimate.express_text,
            "countdown": {
                "state": preview.countdown.state.value,
                "text": preview.countdown.formatted,
            },
            "messages": preview.messages,
        })
        return 0

    print(f"Rule:      {preview.rule.name} ({preview.rule.id})")
    print(f"Now:       {now.isoformat(timespec='minutes')}")
    print(f"Ships:     {format_iso(preview.estimate.shipment_date)}")
    print(f"Arrives:   {preview.estimate.arrival_text}")
    print(f"Express:   {preview.estimate.express_text}")
    print(f"Countdown: {preview.countdown.state.value} {preview.countdown.formatted}".rstrip())
    for line in preview.messages:
        print(f"  | {line}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ETAPilot delivery date estimation CLI",
        prog="etapilot",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Countries command
    countries_parser = subparsers.add_parser("countries", help="List holiday countries")
    countries_parser.set_defaults(func=cmd_countries)

    # Holidays command
    holidays_parser = subparsers.add_parser("holidays", help="Show national holidays")
    holidays_parser.add_argument("country", help="ISO country code, e.g. GB")
    holidays_parser.add_argument("year", type=int, help="Year")
    holidays_parser.add_argument("--json", action="store_true", help="JSON output")
    holidays_parser.set_defaults(func=cmd_holidays)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a config file")
    validate_parser.add_argument("config", help="Config file (YAML or JSON)")
    validate_parser.set_defaults(func=cmd_validate)

    # Migrate command
    migrate_parser = subparsers.add_parser("migrate", help="Migrate a config to v2")
    migrate_parser.add_argument("config", help="Config file (YAML or JSON)")
    migrate_parser.add_argument("--profile-id", help="Fixed ID for the generated profile")
    migrate_parser.add_argument("-o", "--output", help="Write to file instead of stdout")
    migrate_parser.set_defaults(func=cmd_migrate)

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Preview a product's delivery estimate")
    preview_parser.add_argument("--config", required=True, help="Config file")
    preview_parser.add_argument("--settings", help="Global settings file")
    preview_parser.add_argument("--handle", required=True, help="Product handle")
    preview_parser.add_argument("--tag", action="append", help="Product tag (repeatable)")
    preview_parser.add_argument(
        "--stock-status",
        choices=[s.value for s in StockStatus if s != StockStatus.ANY],
        help="Product stock status",
    )
    preview_parser.add_argument("--now", help="ISO datetime (naive = shop-local)")
    preview_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of approximating when no business day is found",
    )
    preview_parser.add_argument("--json", action="store_true", help="JSON output")
    preview_parser.set_defaults(func=cmd_preview)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (ETAPilotError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
