from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml

from gossip.config import ConfigError, ConfigLoadRequest, load_config, render_initial_template
from gossip.config.env import env_variable_names
from gossip.keygen import gen_key_hex
from gossip.logging import init_logging

logger = logging.getLogger(__name__)

KEY_BYTES = 32


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gossip", description="gossip discussion board configuration tool")
    parser.add_argument(
        "-e",
        "--env",
        dest="use_env",
        action="store_true",
        help="Read configuration from environment variables instead of a file",
    )
    parser.add_argument(
        "--config",
        default="gossip.yaml",
        help="Path to the config file (default: gossip.yaml)",
    )
    parser.add_argument(
        "--env-prefix",
        default="GOSSIP",
        help="Environment variable prefix used with -e (default: GOSSIP)",
    )
    parser.add_argument(
        "--dotenv",
        default=".env",
        help="Optional .env file loaded with -e before reading variables (default: .env)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: init
    init_parser = subparsers.add_parser("init", help="Create an initial configuration file")
    init_parser.add_argument(
        "--output",
        default="-",
        help="Where to write the config, '-' for stdout (default: -)",
    )
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing output file")

    # Command: gen-key
    subparsers.add_parser("gen-key", help="Generate a random 32-byte hex-encoded key")

    # Command: check
    subparsers.add_parser("check", help="Load the configuration and print it with secrets masked")

    # Command: help
    subparsers.add_parser("help", help="Show this message")

    return parser


def _init_config(args: argparse.Namespace) -> int:
    rendered = render_initial_template()
    if args.output == "-":
        sys.stdout.write(rendered)
        return 0

    output = Path(args.output)
    mode = "w" if args.force else "x"
    try:
        with output.open(mode, encoding="utf-8") as f:
            f.write(rendered)
    except FileExistsError:
        logger.error("init.output_exists path=%s hint=use --force to overwrite", output)
        return 1
    except OSError as e:
        logger.error("init.write_failed path=%s error=%s", output, e)
        return 1
    logger.info("init.written path=%s", output)
    return 0


def _gen_key(args: argparse.Namespace) -> int:
    print(gen_key_hex(KEY_BYTES))
    return 0


def _check_config(args: argparse.Namespace) -> int:
    request = ConfigLoadRequest(
        yaml_path=args.config,
        env_prefix=args.env_prefix,
        dotenv_path=args.dotenv if args.use_env else None,
    )
    config = load_config(request, use_env=args.use_env)
    sys.stdout.write(yaml.safe_dump(config.redacted(), sort_keys=False))

    status = 0
    for section in (config.file_storage, config.store):
        try:
            logger.info("check.backend type=%s", section.backend_type().value)
        except ConfigError as e:
            logger.error("check.unknown_backend error=%s", e)
            status = 1
    providers = config.oauth.enabled_providers()
    logger.info("check.oauth enabled=%s", ",".join(providers) or "none")
    if not config.jwt.secret:
        logger.warning("check.jwt_secret_empty")
    return status


def _help(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    parser.print_help(sys.stderr)
    print("\nEnvironment variables read with -e:", file=sys.stderr)
    for name in env_variable_names(args.env_prefix):
        print(f"  {name}", file=sys.stderr)
    return 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    init_logging(args.log_level)

    try:
        if args.command == "init":
            return _init_config(args)
        if args.command == "gen-key":
            return _gen_key(args)
        if args.command == "check":
            return _check_config(args)
        return _help(parser, args)
    except ConfigError as e:
        logger.error("%s.failed error=%s", args.command, e)
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
