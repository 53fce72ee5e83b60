"""ppm-tool — read, write and view binary PPM (P6) images.

Usage: uv run ppm-tool <command> [args] [options]

Commands are auto-discovered from ppm_tool/commands/.
Each command module's docstring is its documentation.
Run `ppm-tool help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, ppm-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import sys

from ppm_tool import registry
from ppm_tool.core.env import load_env
from ppm_tool.core.errors import PpmError


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'ppm_tool.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  ppm-tool cat image.ppm\n'
        '  ppm-tool info image.ppm --json\n'
        '  ppm-tool convert screenshot.png screenshot.ppm\n'
        '  ppm-tool help cat\n'
        '\n'
        'Config env vars (set in .env or environment):\n'
        '  PPM_TOOL_GLYPH       glyph used by cat (default ▀)\n'
        '  PPM_TOOL_CENSUS_TOP  colours listed by info (default 5)\n'
    )
    parser = argparse.ArgumentParser(
        prog='ppm-tool',
        description='Read, write and view binary PPM (P6) images.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        cmd.configure(p)

    # `help` subcommand — prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> int:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: ppm-tool help <command> for full docs.')
        return 0

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        return 1

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc or f'(No module docs for {topic!r})')
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'ppm-tool: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.topic)

    try:
        return registry.get(args.command).execute(args)
    except PpmError as e:
        print(f'Unable to parse image! Cause: {e.message}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
