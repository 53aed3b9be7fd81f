#!/usr/bin/env python3

import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel

from conftemplate.core.schema.introspect import describe_model
from conftemplate.core.utils import import_object
from conftemplate.core.yaml_template import AlignMode, generate_yaml_template, write_yaml_template

logger = logging.getLogger(__name__)


def generate(args, config: Dict[str, Any]) -> int:
    """
    Generate a YAML config template from a pydantic model given as 'module:Class'.
    Prints to stdout unless an output path is given.
    """
    align = args.align or config.get("align", AlignMode.BLOCK.value)
    use_defaults = bool(config.get("use_defaults", True))

    # 1) Resolve the model class (an instance is accepted too)
    try:
        target = import_object(args.model)
    except ValueError as e:
        print(f"Model '{args.model}' not found: {e}")
        return 1
    if isinstance(target, BaseModel):
        target = type(target)

    # 2) Describe and render
    try:
        root = describe_model(target)
        if args.output_path is None:
            print(generate_yaml_template(root, use_defaults, align=align), end="")
            return 0
        output_path = Path(args.output_path).resolve()
        write_yaml_template(root, output_path, use_defaults=use_defaults, align=align)
    except (TypeError, ValueError) as e:
        logger.debug("Template generation failed for %s", args.model, exc_info=True)
        print(f"Error generating template:\n  {e}")
        return 1

    print(f"Template generated at {output_path}")
    return 0


def register(subparsers):
    parser = subparsers.add_parser(
        "generate",
        help="Generate a commented YAML config template from a pydantic model."
    )
    parser.add_argument("model", help="Model to describe, as 'package.module:ClassName'.")
    parser.add_argument("-o", "--output", dest="output_path", default=None,
                        help="Path to save the template (default: stdout).")
    parser.add_argument("--align", choices=[m.value for m in AlignMode], default=None,
                        help="Comment alignment: per block (default) or across the document.")
    parser.set_defaults(func=generate)
