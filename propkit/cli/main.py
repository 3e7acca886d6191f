"""Main CLI entry point for propkit."""

import argparse
import logging
import sys
from typing import Optional

from .commands import encode_stdin, match_subjects, subst_properties


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the propkit CLI."""
    parser = argparse.ArgumentParser(
        prog='propkit',
        description='Property substitution and wildcard filter toolkit'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Subst command
    subst_parser = subparsers.add_parser('subst', help='Resolve ${name} placeholders in property files')
    subst_parser.add_argument(
        'keys',
        nargs='*',
        metavar='KEY',
        help='Only print these properties (default: all)'
    )
    subst_parser.add_argument(
        '--props',
        action='append',
        metavar='FILE',
        help='YAML or .properties file (can be specified multiple times; later files win)'
    )
    subst_parser.add_argument(
        '--set',
        action='append',
        metavar='KEY=VALUE',
        help='Property override (can be specified multiple times)'
    )
    subst_parser.add_argument(
        '--no-env',
        action='store_true',
        help='Do not fall back to environment variables'
    )

    # Match command
    match_parser = subparsers.add_parser('match', help='Test subjects against a wildcard pattern')
    match_parser.add_argument(
        'pattern',
        type=str,
        help="Pattern with '*' wildcards"
    )
    match_parser.add_argument(
        'subjects',
        nargs='+',
        help='Strings to test'
    )

    # Encode command
    encode_parser = subparsers.add_parser('encode', help='Base64-encode standard input')
    encode_parser.add_argument(
        '--line-length',
        type=int,
        default=0,
        help='Wrap output lines at this width (multiple of 4, 0 for no wrapping)'
    )

    return parser


def setup_logging(args: argparse.Namespace) -> None:
    level_name = 'warning' if args.log_level == 'warn' else args.log_level
    log_level = getattr(logging, level_name.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    setup_logging(parsed_args)

    if parsed_args.command == 'subst':
        return subst_properties(parsed_args)
    elif parsed_args.command == 'match':
        return match_subjects(parsed_args)
    elif parsed_args.command == 'encode':
        return encode_stdin(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
