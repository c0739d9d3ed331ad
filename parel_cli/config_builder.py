"""
Configuration builder for parel CLI.

Converts command-line arguments to RunConfig.
"""

from argparse import Namespace
from typing import List, Tuple

from parel_core.config import RunConfig, WordlistSpec


def parse_wordlist_specs(values: List[str] | None) -> Tuple[WordlistSpec, ...]:
    """
    Parse "-f path:identifier" values into WordlistSpec tuple.

    Args:
        values: Raw -f values in declaration order

    Returns:
        Tuple of WordlistSpec objects (declaration order preserved)
    """
    return tuple(WordlistSpec.parse(value) for value in values or [])


def build_run_config(args: Namespace) -> RunConfig:
    """
    Build a RunConfig from command-line arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        RunConfig with all parameters set

    Raises:
        ConfigurationError: If any argument fails validation
    """
    return RunConfig(
        command=args.command,
        wordlists=parse_wordlist_specs(args.file),
        index_identifier=args.index_identifier,
        n_workers=args.threads,
        suppress_output=args.no_output,
        show_indices=tuple(args.show or ()),
        show_progress=args.progress,
        shell=args.shell,
    )


def format_config_summary(config: RunConfig, n_total: int) -> str:
    """
    Format configuration summary for display.

    Args:
        config: RunConfig to summarize
        n_total: Total number of combinations

    Returns:
        Formatted string summary
    """
    lines = [f"  Command: {config.command}"]
    for spec in config.wordlists:
        lines.append(f"  Wordlist: {spec.identifier} <- {spec.path}")
    if config.index_identifier is not None:
        lines.append(f"  Index identifier: {config.index_identifier}")
    lines.append(f"  Jobs: {n_total:,}")
    lines.append(f"  Threads: {config.n_workers}")
    return "\n".join(lines)
