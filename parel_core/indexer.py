"""
Combination indexer for parel

線形ジョブインデックスとワードリストごとのオフセットの相互変換（混合基数分解）を提供

オフセットの並びは宣言順で、最初に宣言されたワードリストが最も速く変化する。
例: sizes = (2, 2) の場合
    index 0 -> (0, 0), 1 -> (1, 0), 2 -> (0, 1), 3 -> (1, 1)
"""

from dataclasses import dataclass, field
from typing import Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

from .exceptions import IndexOutOfRangeError


_INT64_MAX = int(np.iinfo(np.int64).max)


def offsets(index: int, sizes: Sequence[int]) -> Tuple[int, ...]:
    """
    線形インデックスを各ワードリストのオフセットに分解

    offsets[k] = (index // prod(sizes[:k])) % sizes[k]
    範囲チェックは行わない（CombinationIndexer.index_to_offsets を参照）
    """
    out = []
    remaining = index
    for size in sizes:
        out.append(remaining % size)
        remaining //= size
    return tuple(out)


@dataclass
class CombinationIndexer:
    """線形インデックスとオフセットの相互変換"""

    sizes: Tuple[int, ...]  # 各ワードリストの長さ（宣言順）

    # 内部計算結果（post_initで初期化）
    _strides: Tuple[int, ...] = field(init=False, repr=False)
    _n_total: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """ストライドと組み合わせ総数を計算"""
        self.sizes = tuple(int(s) for s in self.sizes)
        for k, size in enumerate(self.sizes):
            if size < 1:
                raise ValueError(f"wordlist size must be positive: sizes[{k}]={size}")
        self._strides = self._compute_strides()
        self._n_total = self._strides[-1] * self.sizes[-1] if self.sizes else 1

    def _compute_strides(self) -> Tuple[int, ...]:
        """
        各ワードリストのストライドを計算（先頭が最も速く変化する順）

        例: sizes = (3, 4, 5) の場合
            strides = (1, 3, 12)
            index = a * 1 + b * 3 + c * 12
        """
        strides = []
        stride = 1
        for size in self.sizes:
            strides.append(stride)
            stride *= size
        return tuple(strides)

    @property
    def n_total(self) -> int:
        """組み合わせ総数（ワードリストが0個なら1）"""
        return self._n_total

    @property
    def n_wordlists(self) -> int:
        """ワードリスト数"""
        return len(self.sizes)

    def index_to_offsets(self, index: int) -> Tuple[int, ...]:
        """
        線形インデックスをオフセットに変換

        Args:
            index: 線形インデックス（0 <= index < n_total）

        Returns:
            各ワードリストのオフセット（宣言順）

        Raises:
            IndexOutOfRangeError: インデックスが範囲外の場合
        """
        if not (0 <= index < self._n_total):
            raise IndexOutOfRangeError(index, self._n_total)
        return offsets(index, self.sizes)

    def offsets_to_index(self, coords: Sequence[int]) -> int:
        """
        オフセットを線形インデックスに変換

        Raises:
            ValueError: 次元がワードリスト数と一致しない場合
            ValueError: オフセットが範囲外の場合
        """
        if len(coords) != len(self.sizes):
            raise ValueError(
                f"offset dimension mismatch: {len(coords)} != {len(self.sizes)}"
            )

        index = 0
        for k, (coord, stride, size) in enumerate(
            zip(coords, self._strides, self.sizes)
        ):
            if not (0 <= coord < size):
                raise ValueError(
                    f"offset out of range: offsets[{k}]={coord}, valid range=[0, {size})"
                )
            index += coord * stride

        return index

    def _batch_dtype(self) -> type:
        # 組み合わせ総数がint64に収まらない場合はPythonの整数で計算する
        return np.int64 if self._n_total <= _INT64_MAX else object

    def batch_indices_to_offsets(self, indices: Sequence[int]) -> NDArray:
        """
        複数の線形インデックスを一括でオフセットに変換

        Args:
            indices: 線形インデックスの列（shape: (n,)）

        Returns:
            オフセット配列（shape: (n, n_wordlists)）

        Raises:
            IndexOutOfRangeError: 範囲外のインデックスを含む場合
        """
        dtype = self._batch_dtype()
        remaining = np.asarray(indices, dtype=dtype).reshape(-1)
        for idx in remaining:
            if not (0 <= idx < self._n_total):
                raise IndexOutOfRangeError(int(idx), self._n_total)

        coords = np.zeros((len(remaining), len(self.sizes)), dtype=dtype)
        for k, size in enumerate(self.sizes):
            coords[:, k] = remaining % size
            remaining = remaining // size

        return coords
