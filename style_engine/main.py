#!/usr/bin/env python3
"""
Wink Style Engine - Main Entry Point

Parses CSS declarations or a stylesheet and prints the resolved longhands.
"""

import argparse
import json
import sys
from typing import List, Optional

from style_engine import __version__
from style_engine.css.declaration import CSSStyleDeclaration, parse_declaration_block
from style_engine.css.properties import ParserOptions, PropertyParser
from style_engine.css.stylesheet import StyleSheetResolver
from style_engine.utils.config import Config
from style_engine.utils.logging import log_exception, setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Wink Style Engine - validate CSS values and expand shorthands")

    parser.add_argument("declarations", nargs="?", default=None,
                        help="Declaration block, e.g. 'margin: 1px 2px; float: left'")
    parser.add_argument("--stylesheet", type=str, default=None,
                        help="Resolve a stylesheet file instead of a declaration block")
    parser.add_argument("--important", action="store_true",
                        help="Mark every declaration as !important")
    parser.add_argument("--config", type=str, default=None, help="Path to a JSON config file")
    parser.add_argument("--strict-integers", action="store_true",
                        help="Only accept plain integers for flex factors")
    parser.add_argument("--legacy-box-shorthands", action="store_true",
                        help="Read every margin/padding side from the first token")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"Wink Style Engine {__version__}")

    args = parser.parse_args(argv)
    if args.declarations is None and args.stylesheet is None:
        parser.error("either declarations or --stylesheet is required")
    return args


def build_parser(args: argparse.Namespace, config: Config) -> PropertyParser:
    """Create a property parser from the config file and command line switches."""
    options = ParserOptions.from_config(config)
    options = ParserOptions(
        strict_integers=options.strict_integers or args.strict_integers,
        legacy_box_shorthands=options.legacy_box_shorthands or args.legacy_box_shorthands,
    )
    return PropertyParser(options)


def resolve_declarations(text: str, parser: PropertyParser, important: bool) -> CSSStyleDeclaration:
    """Resolve a declaration block, optionally forcing !important."""
    declaration = CSSStyleDeclaration(parser=parser)
    for name, value, is_important in parse_declaration_block(text):
        priority = 'important' if important or is_important else ''
        declaration.set_property(name, value, priority)
    return declaration


def format_declaration(declaration: CSSStyleDeclaration) -> List[str]:
    lines = []
    for name in declaration:
        priority = ' !important' if declaration.get_property_priority(name) else ''
        lines.append(f"{name}: {declaration.get_property_value(name)}{priority}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the style engine."""
    args = parse_args(argv)

    config = Config(args.config)
    logger = setup_logging(
        log_file=config.get('logging.log_file'),
        console_level="DEBUG" if args.debug else config.get('logging.console_level') or 'WARNING',
        file_level=config.get('logging.file_level') or 'DEBUG',
    )

    parser = build_parser(args, config)

    if args.stylesheet:
        try:
            with open(args.stylesheet, 'r', encoding='utf-8') as f:
                css_content = f.read()
        except OSError as e:
            log_exception(logger, e, f"Could not read stylesheet {args.stylesheet}")
            return 2

        styles = StyleSheetResolver(parser).resolve(css_content)
        if args.json:
            print(json.dumps({selector: declaration.to_dict() for selector, declaration in styles.items()},
                             indent=2))
        else:
            for selector, declaration in styles.items():
                print(f"{selector} {{")
                for line in format_declaration(declaration):
                    print(f"    {line};")
                print("}")
        return 0 if any(len(declaration) for declaration in styles.values()) else 1

    declaration = resolve_declarations(args.declarations, parser, args.important)
    if args.json:
        print(json.dumps({
            name: {
                'value': declaration.get_property_value(name),
                'important': bool(declaration.get_property_priority(name)),
            }
            for name in declaration
        }, indent=2))
    else:
        for line in format_declaration(declaration):
            print(line)

    if not len(declaration):
        logger.warning("No declaration was accepted")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
