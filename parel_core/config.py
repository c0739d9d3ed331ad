"""
Configuration classes for parel

実行設定（イミュータブル）と実行前バリデーション
"""

import re
from dataclasses import dataclass, field
from typing import Tuple

from .exceptions import (
    ConfigurationError,
    DuplicateIdentifierError,
    IdentifierNotInCommandError,
)


DEFAULT_N_WORKERS = 10
DEFAULT_SHELL = "sh"

_IDENTIFIER_PATTERN = re.compile(r"\w+")


@dataclass(frozen=True)
class WordlistSpec:
    """ワードリスト指定（識別子とファイルパス）"""
    identifier: str              # コマンド中で置換されるトークン
    path: str                    # ワードリストファイルのパス

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ConfigurationError(
                f"Missing file name, example: '-f {self.path}:foo'"
            )
        if not _IDENTIFIER_PATTERN.fullmatch(self.identifier):
            raise ConfigurationError(
                f"identifier must be alphanumeric: '{self.identifier}'"
            )
        if not self.path:
            raise ConfigurationError(
                f"Missing file path for identifier '{self.identifier}'"
            )

    @classmethod
    def parse(cls, value: str) -> "WordlistSpec":
        """
        "path:identifier" 形式の文字列を分解

        パス側にコロンを含められるよう、最後のコロンで分割する。
        元のparelは最初のコロンで分割していたが、識別子は英数字のみのため
        意図的に最後のコロンを区切りとしている。
        """
        path, sep, identifier = value.rpartition(":")
        if not sep:
            raise ConfigurationError(
                f"Missing file name, example: '-f {value}:foo'"
            )
        return cls(identifier=identifier, path=path)


@dataclass(frozen=True)
class RunConfig:
    """1回の実行全体の設定（イミュータブル）"""

    # ユーザ指定パラメータ
    command: str                                     # コマンドテンプレート
    wordlists: Tuple[WordlistSpec, ...] = ()         # 宣言順のワードリスト
    index_identifier: str | None = None              # ジョブ番号に置換されるトークン
    n_workers: int = DEFAULT_N_WORKERS               # ワーカースレッド数
    suppress_output: bool = False                    # ジョブの標準出力/標準エラーを抑制
    show_indices: Tuple[int, ...] = ()               # 指定時は表示のみで実行しない
    show_progress: bool = False                      # 進捗バー表示

    # システム内部デフォルト
    shell: str = field(default=DEFAULT_SHELL)

    def __post_init__(self) -> None:
        """バリデーション"""
        if not self.command:
            raise ConfigurationError("command must not be empty")

        if self.n_workers < 1:
            raise ConfigurationError(
                f"number of threads must be at least 1: {self.n_workers}"
            )

        if self.index_identifier is not None:
            if not _IDENTIFIER_PATTERN.fullmatch(self.index_identifier):
                raise ConfigurationError(
                    f"index identifier must be alphanumeric: '{self.index_identifier}'"
                )

        # 識別子の重複チェック（インデックス識別子も含む）
        seen = set()
        if self.index_identifier is not None:
            seen.add(self.index_identifier)
        for spec in self.wordlists:
            if spec.identifier in seen:
                raise DuplicateIdentifierError(spec.identifier)
            seen.add(spec.identifier)

        # コマンド中の出現チェック
        for identifier in self.identifiers:
            if identifier not in self.command:
                raise IdentifierNotInCommandError(identifier)

        for index in self.show_indices:
            if index < 0:
                raise ConfigurationError(
                    f"show parameter must be non-negative: {index}"
                )

    @property
    def identifiers(self) -> Tuple[str, ...]:
        """照合優先順の全識別子（インデックス識別子が先頭）"""
        names = tuple(spec.identifier for spec in self.wordlists)
        if self.index_identifier is not None:
            return (self.index_identifier,) + names
        return names

    @property
    def show_only(self) -> bool:
        """表示専用モードかどうか"""
        return len(self.show_indices) > 0
