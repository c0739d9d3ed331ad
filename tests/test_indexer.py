"""
Tests for CombinationIndexer
"""

import itertools

import pytest
import numpy as np

from parel_core.exceptions import IndexOutOfRangeError
from parel_core.indexer import CombinationIndexer, offsets


class TestCombinationIndexer:
    """CombinationIndexerの単体テスト"""

    def test_init_2wordlists(self) -> None:
        """2ワードリストでの初期化"""
        indexer = CombinationIndexer((3, 4))
        assert indexer.n_total == 12
        assert indexer.n_wordlists == 2

    def test_init_3wordlists(self) -> None:
        """3ワードリストでの初期化"""
        indexer = CombinationIndexer((2, 3, 4))
        assert indexer.n_total == 24
        assert indexer.n_wordlists == 3

    def test_init_no_wordlists(self) -> None:
        """ワードリスト0個では組み合わせ総数1"""
        indexer = CombinationIndexer(())
        assert indexer.n_total == 1
        assert indexer.index_to_offsets(0) == ()

    def test_init_rejects_empty_wordlist(self) -> None:
        """長さ0のワードリストはエラー"""
        with pytest.raises(ValueError, match="must be positive"):
            CombinationIndexer((3, 0))

    def test_first_wordlist_varies_fastest(self) -> None:
        """先に宣言したワードリストが最も速く変化する"""
        indexer = CombinationIndexer((2, 2))
        assert indexer.index_to_offsets(0) == (0, 0)
        assert indexer.index_to_offsets(1) == (1, 0)
        assert indexer.index_to_offsets(2) == (0, 1)
        assert indexer.index_to_offsets(3) == (1, 1)

    def test_index_to_offsets_3wordlists(self) -> None:
        """3ワードリストでのインデックス→オフセット変換"""
        indexer = CombinationIndexer((2, 3, 4))
        assert indexer.index_to_offsets(0) == (0, 0, 0)
        assert indexer.index_to_offsets(1) == (1, 0, 0)
        assert indexer.index_to_offsets(2) == (0, 1, 0)
        assert indexer.index_to_offsets(6) == (0, 0, 1)
        assert indexer.index_to_offsets(23) == (1, 2, 3)

    def test_offsets_to_index_3wordlists(self) -> None:
        """3ワードリストでのオフセット→インデックス変換"""
        indexer = CombinationIndexer((2, 3, 4))
        assert indexer.offsets_to_index((0, 0, 0)) == 0
        assert indexer.offsets_to_index((1, 0, 0)) == 1
        assert indexer.offsets_to_index((0, 1, 0)) == 2
        assert indexer.offsets_to_index((0, 0, 1)) == 6
        assert indexer.offsets_to_index((1, 2, 3)) == 23

    @pytest.mark.parametrize(
        "sizes", [(1,), (5,), (2, 3), (3, 1, 4), (2, 2, 2, 2), (7, 1, 1, 3)]
    )
    def test_bijection(self, sizes: tuple) -> None:
        """[0, n_total) とオフセットの直積が一対一に対応する"""
        indexer = CombinationIndexer(sizes)
        expected_total = int(np.prod(sizes))
        assert indexer.n_total == expected_total

        seen = [indexer.index_to_offsets(i) for i in range(indexer.n_total)]
        assert len(set(seen)) == expected_total
        assert set(seen) == set(itertools.product(*(range(s) for s in sizes)))

        for i, coords in enumerate(seen):
            assert indexer.offsets_to_index(coords) == i

    def test_module_level_offsets_matches_indexer(self) -> None:
        """関数 offsets と index_to_offsets が一致する"""
        sizes = (3, 5, 2)
        indexer = CombinationIndexer(sizes)
        for i in range(indexer.n_total):
            assert offsets(i, sizes) == indexer.index_to_offsets(i)

    def test_large_combination_space(self) -> None:
        """int64を超える組み合わせ総数でも計算できる"""
        sizes = (10**7,) * 3
        indexer = CombinationIndexer(sizes)
        assert indexer.n_total == 10**21
        last = indexer.n_total - 1
        assert indexer.index_to_offsets(last) == (10**7 - 1,) * 3

    def test_batch_indices_to_offsets(self) -> None:
        """バッチインデックス→オフセット変換"""
        indexer = CombinationIndexer((5, 6, 7))
        indices = [0, 10, 50, 100]
        coords = indexer.batch_indices_to_offsets(indices)
        assert coords.shape == (4, 3)
        for i, idx in enumerate(indices):
            assert tuple(int(c) for c in coords[i]) == indexer.index_to_offsets(idx)

    def test_batch_rejects_out_of_range(self) -> None:
        """バッチ変換でも範囲外インデックスはエラー"""
        indexer = CombinationIndexer((2, 2))
        with pytest.raises(IndexOutOfRangeError):
            indexer.batch_indices_to_offsets([0, 4])

    def test_offsets_dimension_mismatch(self) -> None:
        """オフセット次元の不一致でエラー"""
        indexer = CombinationIndexer((3, 4, 5))
        with pytest.raises(ValueError, match="dimension mismatch"):
            indexer.offsets_to_index((1, 2))

    def test_offsets_out_of_range(self) -> None:
        """オフセット範囲外でエラー"""
        indexer = CombinationIndexer((3, 4, 5))
        with pytest.raises(ValueError, match="offset out of range"):
            indexer.offsets_to_index((3, 0, 0))

    @pytest.mark.parametrize("index", [-1, 60, 100])
    def test_index_out_of_range(self, index: int) -> None:
        """インデックス範囲外でエラー"""
        indexer = CombinationIndexer((3, 4, 5))
        with pytest.raises(IndexOutOfRangeError):
            indexer.index_to_offsets(index)
