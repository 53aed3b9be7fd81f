# conftemplate/cli/config.py
#!/usr/bin/env python3
import json
from typing import Any, Dict


def register(subparsers):
    sp = subparsers.add_parser("config", help="Config utilities")
    sps = sp.add_subparsers(dest="config_cmd")

    # default when user runs: `conftemplate config`
    def config_default(args, config: Dict[str, Any]) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=config_default)

    showp = sps.add_parser("show", help="Show effective config")
    showp.set_defaults(func=show_config)


def show_config(args, config: Dict[str, Any]) -> int:
    print(json.dumps(config, indent=2))
    return 0
