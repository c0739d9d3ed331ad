"""
Result data structures for parel

ジョブ結果の集計
"""

import threading
from dataclasses import dataclass

from .executor import JobOutcome, JobStatus


@dataclass
class RunSummary:
    """1回の実行の集計結果"""

    n_total: int                   # 組み合わせ総数
    n_succeeded: int = 0           # 終了コード0のジョブ数
    n_failed: int = 0              # 終了コード非0のジョブ数
    n_launch_errors: int = 0       # 起動できなかったジョブ数
    elapsed_seconds: float = 0.0   # 実行時間（秒）

    @property
    def n_completed(self) -> int:
        """処理済みジョブ数"""
        return self.n_succeeded + self.n_failed + self.n_launch_errors


class SummaryRecorder:
    """ワーカーから並行に結果を受け取り RunSummary に集計する"""

    def __init__(self, n_total: int) -> None:
        self._summary = RunSummary(n_total=n_total)
        self._lock = threading.Lock()

    def record(self, outcome: JobOutcome) -> None:
        with self._lock:
            if outcome.status is JobStatus.SUCCEEDED:
                self._summary.n_succeeded += 1
            elif outcome.status is JobStatus.FAILED:
                self._summary.n_failed += 1
            else:
                self._summary.n_launch_errors += 1

    def finish(self, elapsed_seconds: float) -> RunSummary:
        with self._lock:
            self._summary.elapsed_seconds = elapsed_seconds
            return self._summary
