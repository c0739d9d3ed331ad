"""
parel Core Package

ワードリストの直積からシェルコマンドを生成し、固定数のワーカーで並列実行するコアモジュール
"""

from .config import RunConfig, WordlistSpec
from .wordlist import Wordlist, load_wordlist, load_wordlists
from .indexer import CombinationIndexer, offsets
from .template import CommandTemplate, CommandRenderer, PlaceholderKind, Segment
from .dispatcher import JobDispatcher
from .executor import CommandExecutor, JobOutcome, JobStatus, OutputChannel, ErrorChannel
from .results import RunSummary
from .engine import RunEngine
from .exceptions import (
    ParelError,
    ConfigurationError,
    DuplicateIdentifierError,
    IdentifierNotInCommandError,
    ShowIndexOutOfRangeError,
    WordlistLoadError,
    IndexOutOfRangeError,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "RunConfig",
    "WordlistSpec",
    "Wordlist",
    "load_wordlist",
    "load_wordlists",
    # Core
    "CombinationIndexer",
    "offsets",
    "CommandTemplate",
    "CommandRenderer",
    "PlaceholderKind",
    "Segment",
    "JobDispatcher",
    "CommandExecutor",
    "JobOutcome",
    "JobStatus",
    "OutputChannel",
    "ErrorChannel",
    "RunSummary",
    "RunEngine",
    # Exceptions
    "ParelError",
    "ConfigurationError",
    "DuplicateIdentifierError",
    "IdentifierNotInCommandError",
    "ShowIndexOutOfRangeError",
    "WordlistLoadError",
    "IndexOutOfRangeError",
]
