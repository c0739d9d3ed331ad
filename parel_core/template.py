"""
Command template compiler and renderer for parel

コマンド文字列を (リテラル, プレースホルダ) のセグメント列に一度だけコンパイルし、
ジョブごとに具体的なコマンドへ展開する
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from .indexer import CombinationIndexer
from .wordlist import Wordlist


class PlaceholderKind(Enum):
    """プレースホルダの種別"""
    WORDLIST = "wordlist"
    INDEX = "index"


@dataclass(frozen=True)
class Segment:
    """リテラル接頭辞と、その直後に置換されるプレースホルダ"""
    literal: str
    kind: PlaceholderKind | None = None   # None は末尾セグメントのみ
    wordlist: int | None = None           # kind == WORDLIST のときの宣言順番号


@dataclass(frozen=True)
class CommandTemplate:
    """コンパイル済みコマンドテンプレート（イミュータブル）"""

    segments: Tuple[Segment, ...]

    @classmethod
    def compile(
        cls,
        command: str,
        identifiers: Sequence[str],
        index_identifier: str | None = None,
    ) -> "CommandTemplate":
        """
        コマンド文字列を左から走査してセグメント列に分解

        各位置でまずインデックス識別子、次にワードリスト識別子を宣言順に
        前方一致で照合し、最初に一致したものを採用する（最長一致ではない）。
        例: "foo" が "foobar" より先に登録されていれば、"foobar" は
        "foo" として消費され、"bar" はリテラルとして残る。

        コンパイル自体は失敗しない。識別子がコマンド中に現れることの
        検証は呼び出し側の責務。
        """
        candidates = []
        if index_identifier:
            candidates.append((index_identifier, PlaceholderKind.INDEX, None))
        for k, identifier in enumerate(identifiers):
            if identifier:
                candidates.append((identifier, PlaceholderKind.WORDLIST, k))

        segments = []
        pending = []
        i = 0
        while i < len(command):
            for identifier, kind, k in candidates:
                if command.startswith(identifier, i):
                    segments.append(Segment("".join(pending), kind, k))
                    pending = []
                    i += len(identifier)
                    break
            else:
                pending.append(command[i])
                i += 1

        segments.append(Segment("".join(pending)))
        return cls(segments=tuple(segments))

    def referenced_wordlists(self) -> frozenset:
        """少なくとも1回一致したワードリスト番号の集合"""
        return frozenset(
            s.wordlist for s in self.segments if s.kind is PlaceholderKind.WORDLIST
        )

    def render(
        self,
        index: int,
        offsets: Sequence[int],
        values: Sequence[Sequence[str]],
    ) -> str:
        """
        セグメント順にリテラルと置換値を連結

        Args:
            index: ジョブの線形インデックス（INDEXプレースホルダに10進で埋め込む）
            offsets: 各ワードリストのオフセット
            values: 各ワードリストの値の列（宣言順）
        """
        parts = []
        for segment in self.segments:
            parts.append(segment.literal)
            if segment.kind is PlaceholderKind.INDEX:
                parts.append(str(index))
            elif segment.kind is PlaceholderKind.WORDLIST:
                k = segment.wordlist
                parts.append(values[k][offsets[k]])
        return "".join(parts)


@dataclass(frozen=True)
class CommandRenderer:
    """テンプレート・ワードリスト・インデクサーをまとめた読み取り専用の展開器"""

    template: CommandTemplate
    wordlists: Tuple[Wordlist, ...]
    indexer: CombinationIndexer

    @classmethod
    def build(
        cls,
        command: str,
        wordlists: Sequence[Wordlist],
        index_identifier: str | None = None,
    ) -> "CommandRenderer":
        wordlists = tuple(wordlists)
        template = CommandTemplate.compile(
            command,
            [w.identifier for w in wordlists],
            index_identifier,
        )
        indexer = CombinationIndexer(tuple(len(w) for w in wordlists))
        return cls(template=template, wordlists=wordlists, indexer=indexer)

    @property
    def n_total(self) -> int:
        return self.indexer.n_total

    def render(self, index: int) -> str:
        """線形インデックスに対応するコマンドを生成"""
        coords = self.indexer.index_to_offsets(index)
        return self.template.render(
            index, coords, [w.values for w in self.wordlists]
        )

    def render_many(self, indices: Sequence[int]) -> list:
        """複数インデックスを一括で生成（オフセットはnumpyで一括計算）"""
        coords_array = self.indexer.batch_indices_to_offsets(indices)
        values = [w.values for w in self.wordlists]
        return [
            self.template.render(int(index), [int(c) for c in coords], values)
            for index, coords in zip(indices, coords_array)
        ]
