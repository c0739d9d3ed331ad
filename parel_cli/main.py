"""
Main entry point for parel.

Usage:
    python -m parel_cli COMMAND [options]

Example:
    python -m parel_cli "curl -s https://example.com/PATH" -f paths.txt:PATH -t 20
"""

import argparse
import logging
import sys
from typing import List

from parel_core import __version__
from parel_core.engine import RunEngine
from parel_core.exceptions import ParelError
from .config_builder import build_run_config, format_config_summary
from .reporter import ProgressReporter, print_commands, print_error, print_summary


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="parel",
        description="Parallelization CLI tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  parel "echo A-B" -f a.txt:A -f b.txt:B
  parel "curl -s host/PATH -o out_N" -f paths.txt:PATH -i N -t 32 -p
  parel "echo A-B" -f a.txt:A -f b.txt:B --show 3
        """
    )

    parser.add_argument(
        "command",
        type=str,
        help="Command template; identifiers are replaced by wordlist values"
    )
    parser.add_argument(
        "-t", "--threads",
        type=int,
        default=10,
        help="Number of threads (default: 10)"
    )
    parser.add_argument(
        "-s", "--show",
        type=int,
        action="append",
        default=None,
        metavar="N",
        help="Show nth command that will be executed (repeatable)"
    )
    parser.add_argument(
        "-f", "--file",
        type=str,
        action="append",
        default=None,
        metavar="PATH:IDENT",
        help="A file and an identifier used in command [example: abc.txt:foo]"
    )
    parser.add_argument(
        "-i", "--index-identifier",
        type=str,
        default=None,
        metavar="IDENT",
        help="Identifier replaced by the job's own index"
    )
    parser.add_argument(
        "--shell",
        type=str,
        default="sh",
        help="Shell used to run each command as '<shell> -c <command>' (default: sh)"
    )

    # Output control
    parser.add_argument(
        "--no-output",
        action="store_true",
        help="Don't show command stdout or stderr"
    )
    parser.add_argument(
        "-p", "--progress",
        action="store_true",
        help="Enable progress bar"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging and a run summary"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: List[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = build_run_config(args)
        engine = RunEngine(config)

        # Show mode: print only, never execute
        if config.show_only:
            print_commands(engine.show())
            return 0

        if args.verbose:
            print("Configuration:", file=sys.stderr)
            print(format_config_summary(config, engine.n_total), file=sys.stderr)

        reporter = ProgressReporter(engine.n_total) if config.show_progress else None
        if reporter:
            engine.progress_callback = reporter.advance

        try:
            summary = engine.run()
        finally:
            if reporter:
                reporter.close()

        if args.verbose:
            print_summary(summary)

        # Individual job failures do not affect the exit status
        return 0

    except ParelError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        print_error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
