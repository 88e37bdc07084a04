"""
Command line interface.

Usage:
    domain-checker myapp mysite
    domain-checker -e .com,.io,.fr myapp
    domain-checker -f names.txt -o results.json
    domain-checker myapp --json
"""

import argparse
import asyncio
import sys

from . import __version__, show_config
from .checker import DomainChecker
from .config import ConfigError, Settings, configure_logging, load_settings
from .names import expand_domains, load_names_file, normalize_extensions
from .output import ConsoleReporter, Palette, results_to_json, save_results
from .resolver import CheckResult


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domain-checker",
        description="Check domain name availability via DNS + whois",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s myapp mysite
    %(prog)s -e .com,.io,.fr myapp
    %(prog)s -f names.txt -o results.json
    %(prog)s myapp --json

Environment:
    DOMAIN_CHECKER_EXTENSIONS     Default extension list
    DOMAIN_CHECKER_DELAY          Default delay between checks (ms)
    DOMAIN_CHECKER_WHOIS_TIMEOUT  whois time limit (seconds)
    DOMAIN_CHECKER_DEBUG          Enable debug logging on stderr
        """
    )
    parser.add_argument(
        "names",
        nargs="*",
        help="One or more base names to check (e.g. myapp coolsite)"
    )
    parser.add_argument(
        "-e", "--extensions",
        type=str,
        default=None,
        help=f"Comma-separated TLD list (default: {','.join(settings.extensions)})"
    )
    parser.add_argument(
        "-f", "--file",
        type=str,
        default=None,
        help="Text file with one base name per line"
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Save results to a .json or .csv file"
    )
    parser.add_argument(
        "-d", "--delay",
        type=int,
        default=None,
        metavar="MS",
        help=f"Delay between checks in ms (default: {settings.delay_ms})"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print all results as JSON (machine-readable)"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print available domains"
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=__version__,
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show the resolved configuration and exit"
    )
    parser.add_argument(
        "--mcp",
        action="store_true",
        help="Run as an MCP server on stdio"
    )
    return parser


async def _run_checks(
    checker: DomainChecker,
    domains: list[str],
    reporter: ConsoleReporter | None,
) -> list[CheckResult]:
    results = []
    if reporter:
        reporter.header(len(domains))

    on_start = reporter.before_check if reporter else None
    async for result in checker.iter_results(domains, on_start=on_start):
        results.append(result)
        if reporter:
            reporter.report(result)
    return results


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    configure_logging()
    error_palette = Palette.for_stream(sys.stderr)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"\n  {error_palette.red('Error:')} {e}\n", file=sys.stderr)
        return 1

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if args.mcp:
        from .server import mcp
        mcp.run()
        return 0

    if args.show_config:
        show_config(settings)
        return 0

    names = list(args.names)
    if args.file:
        try:
            names.extend(load_names_file(args.file))
        except FileNotFoundError as e:
            parser.error(str(e))

    if not names:
        parser.print_help()
        return 1

    if args.extensions is not None:
        extensions = normalize_extensions(args.extensions)
        if not extensions:
            parser.error("--extensions requires at least one extension")
        settings.extensions = extensions

    if args.delay is not None:
        if args.delay < 0:
            parser.error("--delay must not be negative")
        settings.delay_ms = args.delay

    domains = expand_domains(names, settings.extensions)
    checker = settings.build_checker()

    reporter = None if args.json else ConsoleReporter(quiet=args.quiet)
    results = asyncio.run(_run_checks(checker, domains, reporter))

    if args.json:
        print(results_to_json(results), end="")
    else:
        reporter.summary(results)

    if args.output:
        try:
            path = save_results(results, args.output)
        except OSError as e:
            print(f"\n  {error_palette.red('Error:')} could not write {args.output}: {e}\n", file=sys.stderr)
            return 1
        if reporter:
            reporter.saved(path)
        else:
            print(f"Results saved → {path}", file=sys.stderr)

    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
