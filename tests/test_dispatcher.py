"""
Tests for JobDispatcher
"""

import random
import threading
import time

import pytest

from parel_core.dispatcher import JobDispatcher


def drain_concurrently(dispatcher: JobDispatcher, n_workers: int, jitter: bool) -> list:
    """複数スレッドから claim を繰り返し、取得したインデックスを全て返す"""
    claimed = []
    lock = threading.Lock()

    def worker(seed: int) -> None:
        rng = random.Random(seed)
        local = []
        while True:
            index = dispatcher.claim()
            if index is None:
                break
            local.append(index)
            if jitter:
                time.sleep(rng.random() * 0.001)
        with lock:
            claimed.extend(local)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return claimed


class TestJobDispatcher:
    """JobDispatcherの単体テスト"""

    def test_claims_in_increasing_order(self) -> None:
        """単一スレッドでは0から昇順に払い出す"""
        dispatcher = JobDispatcher(5)
        assert [dispatcher.claim() for _ in range(5)] == [0, 1, 2, 3, 4]

    def test_exhausted_returns_none(self) -> None:
        """総数に達したら None を返し続ける（total は払い出さない）"""
        dispatcher = JobDispatcher(3)
        for _ in range(3):
            dispatcher.claim()
        assert dispatcher.claim() is None
        assert dispatcher.claim() is None

    def test_single_job(self) -> None:
        """総数1ではindex 0のみ"""
        dispatcher = JobDispatcher(1)
        assert dispatcher.claim() == 0
        assert dispatcher.claim() is None

    def test_zero_jobs(self) -> None:
        """総数0では何も払い出さない"""
        dispatcher = JobDispatcher(0)
        assert dispatcher.claim() is None

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValueError):
            JobDispatcher(-1)

    @pytest.mark.parametrize("n_workers", [1, 2, 8, 32])
    @pytest.mark.parametrize("n_total", [1, 7, 500])
    def test_concurrent_claims_unique_and_complete(
        self, n_workers: int, n_total: int
    ) -> None:
        """並行 claim で全インデックスがちょうど1回ずつ払い出される"""
        dispatcher = JobDispatcher(n_total)
        claimed = drain_concurrently(dispatcher, n_workers, jitter=True)
        assert len(claimed) == n_total
        assert sorted(claimed) == list(range(n_total))

    def test_concurrent_claims_without_sleep(self) -> None:
        """待ちなしの高競合でも重複・欠番がない"""
        dispatcher = JobDispatcher(20_000)
        claimed = drain_concurrently(dispatcher, 16, jitter=False)
        assert sorted(claimed) == list(range(20_000))

    def test_more_workers_than_jobs(self) -> None:
        """ワーカー数がジョブ数より多くても重複しない"""
        dispatcher = JobDispatcher(3)
        claimed = drain_concurrently(dispatcher, 50, jitter=True)
        assert sorted(claimed) == [0, 1, 2]
