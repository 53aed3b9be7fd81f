#!/usr/bin/env python3

import argparse
import logging
import sys

from conftemplate.core.config import load_config, log_level
from conftemplate.cli import config, generate


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="conftemplate", description="YAML config template generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they should accept the loaded config)
    generate.register(subparsers)
    config.register(subparsers)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        cfg = load_config()  # built once
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(
        level="DEBUG" if args.verbose else log_level(cfg),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args, cfg)


if __name__ == "__main__":
    sys.exit(main())
