"""
Wordlist loader for parel

ワードリストファイルを1行1値として読み込む
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from .config import WordlistSpec
from .exceptions import ConfigurationError, WordlistLoadError


@dataclass(frozen=True)
class Wordlist:
    """識別子付きの不変な値の列"""

    identifier: str
    values: Tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.values) == 0:
            raise ValueError(f"wordlist '{self.identifier}' is empty")

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, offset: int) -> str:
        return self.values[offset]


def read_lines(path: Path) -> List[str]:
    """
    ファイルを行のリストとして読み込む

    改行（\\n, \\r\\n）は取り除き、それ以外の変換は行わない。
    末尾の改行は空行を生成しない。

    Raises:
        WordlistLoadError: 読み込みまたはUTF-8デコードに失敗した場合
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except OSError as e:
        raise WordlistLoadError(str(path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise WordlistLoadError(str(path), f"invalid UTF-8 ({e.reason})") from e

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_wordlist(spec: WordlistSpec) -> Wordlist:
    """単一のワードリストを読み込む"""
    path = Path(spec.path)
    if not path.exists():
        raise ConfigurationError(f"file '{spec.path}' does not exist")

    lines = read_lines(path)
    if not lines:
        raise WordlistLoadError(spec.path, "file is empty")

    return Wordlist(identifier=spec.identifier, values=tuple(lines))


def load_wordlists(specs: Sequence[WordlistSpec]) -> Tuple[Wordlist, ...]:
    """
    宣言順にワードリストを読み込む

    ファイルの存在確認をすべて済ませてから読み込みを始めるため、
    存在しないファイルがあれば1つも読み込まずに失敗する。
    """
    for spec in specs:
        if not Path(spec.path).exists():
            raise ConfigurationError(f"file '{spec.path}' does not exist")
    return tuple(load_wordlist(spec) for spec in specs)
