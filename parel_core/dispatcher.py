"""
Job dispatcher for parel

ワーカー間で共有されるジョブカウンタ
"""

import threading


class JobDispatcher:
    """[0, n_total) のインデックスを重複・欠番なく昇順で払い出す"""

    def __init__(self, n_total: int) -> None:
        if n_total < 0:
            raise ValueError(f"n_total must be non-negative: {n_total}")
        self._n_total = n_total
        self._next = 0
        self._lock = threading.Lock()

    @property
    def n_total(self) -> int:
        return self._n_total

    def claim(self) -> int | None:
        """
        次のジョブインデックスを取得

        範囲チェックとインクリメントは同一のロック区間で行う。

        Returns:
            取得したインデックス。全ジョブ払い出し済みなら None
        """
        with self._lock:
            index = self._next
            if index >= self._n_total:
                return None
            self._next = index + 1
            return index
