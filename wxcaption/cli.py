"""CLI entry point for the weather caption generator."""

import argparse
import logging

from wxcaption.config.loader import get_config_value, load_config
from wxcaption.config.schema import OutputFormat
from wxcaption.errors import WxCaptionError
from wxcaption.pipeline.caption_pipeline import generate_report
from wxcaption.reporting.formatters import (
    format_image_suggestions,
    format_report_chat,
    format_report_json,
    format_report_text,
)
from wxcaption.storage.cache import open_cache

FORMATTERS = {
    OutputFormat.TEXT: format_report_text,
    OutputFormat.JSON: format_report_json,
    OutputFormat.CHAT: format_report_chat,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wxcaption",
        description="Weather caption generator",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # generate
    gen_p = sub.add_parser("generate", help="Build a forecast summary and captions")
    gen_p.add_argument("location", help="US ZIP code or lat,lon")
    gen_p.add_argument("--days", type=int, default=None, help="Number of days (1-7)")
    gen_p.add_argument(
        "--format", choices=[f.value for f in OutputFormat], default=None,
        help="Output format",
    )
    gen_p.add_argument(
        "--suggestions", action="store_true", help="Append image suggestions"
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. output.max_alerts")

    # cache clear
    cache_p = sub.add_parser("cache", help="Cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("clear", help="Remove all cached lookups")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "generate":
        return _cmd_generate(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "cache":
        return _cmd_cache(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_generate(config, args) -> int:
    days = args.days if args.days is not None else config.output.default_days
    if not 1 <= days <= 7:
        print("Error: --days must be between 1 and 7")
        return 1
    fmt = OutputFormat(args.format) if args.format else config.output.format
    try:
        report = generate_report(config, args.location, days)
    except WxCaptionError as e:
        print(f"Error: {e}")
        return 1

    print(FORMATTERS[fmt](report))
    if args.suggestions:
        print()
        print(format_image_suggestions(report))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1


def _cmd_cache(config, args) -> int:
    if args.cache_command == "clear":
        cache = open_cache(config.cache)
        try:
            cache.clear()
        finally:
            cache.close()
        print(f"Cache cleared ({config.cache.backend})")
        return 0
    print("Use: cache clear")
    return 1
