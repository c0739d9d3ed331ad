"""
Run engine for parel

テンプレートを一度コンパイルし、固定数のワーカースレッドで全組み合わせを実行する
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence

from .config import RunConfig
from .dispatcher import JobDispatcher
from .exceptions import IdentifierNotInCommandError, ShowIndexOutOfRangeError
from .executor import CommandExecutor, JobOutcome
from .results import RunSummary, SummaryRecorder
from .template import CommandRenderer
from .wordlist import Wordlist, load_wordlists


logger = logging.getLogger(__name__)


class RunEngine:
    """コマンド実行エンジン"""

    def __init__(
        self,
        config: RunConfig,
        wordlists: Sequence[Wordlist] | None = None,
        executor: CommandExecutor | None = None,
        progress_callback: Callable[[JobOutcome], None] | None = None,
    ) -> None:
        """
        Args:
            config: 実行設定
            wordlists: 読み込み済みワードリスト（省略時は config から読み込む）
            executor: コマンド実行器（省略時は config から生成）
            progress_callback: ジョブ完了ごとに呼ばれるコールバック

        Raises:
            ConfigurationError: 識別子や --show の値が不正な場合
            WordlistLoadError: ワードリストの読み込みに失敗した場合
        """
        self.config = config
        self.progress_callback = progress_callback

        if wordlists is None:
            wordlists = load_wordlists(config.wordlists)
        self.wordlists = tuple(wordlists)

        # コマンド中の出現を再確認
        identifiers = [w.identifier for w in self.wordlists]
        if config.index_identifier is not None:
            identifiers.append(config.index_identifier)
        for identifier in identifiers:
            if identifier not in config.command:
                raise IdentifierNotInCommandError(identifier)

        self.renderer = CommandRenderer.build(
            config.command, self.wordlists, config.index_identifier
        )
        logger.debug(
            "compiled template into %d segments, %d combinations",
            len(self.renderer.template.segments),
            self.n_total,
        )

        # 先に登録された識別子に常に先取りされる識別子
        referenced = self.renderer.template.referenced_wordlists()
        for k, wordlist in enumerate(self.wordlists):
            if k not in referenced:
                logger.warning(
                    "identifier '%s' is never substituted; "
                    "an earlier identifier always matches first",
                    wordlist.identifier,
                )

        for index in config.show_indices:
            if index >= self.n_total:
                raise ShowIndexOutOfRangeError(index, self.n_total)

        self.executor = executor if executor is not None else CommandExecutor(
            shell=config.shell,
            suppress_output=config.suppress_output,
        )

    @property
    def n_total(self) -> int:
        """組み合わせ総数"""
        return self.renderer.n_total

    def show(self) -> List[str]:
        """--show で指定されたインデックスのコマンドを生成（実行はしない）"""
        return self.renderer.render_many(list(self.config.show_indices))

    def run(self) -> RunSummary:
        """
        全ジョブを実行

        個々のジョブの失敗は集計されるだけで、例外にはならない。

        Returns:
            実行結果の集計
        """
        dispatcher = JobDispatcher(self.n_total)
        recorder = SummaryRecorder(self.n_total)
        n_workers = self.config.n_workers

        logger.debug("starting %d jobs on %d workers", self.n_total, n_workers)
        start_time = time.perf_counter()

        with ThreadPoolExecutor(
            max_workers=n_workers, thread_name_prefix="parel-worker"
        ) as pool:
            futures = [
                pool.submit(self._worker, dispatcher, recorder)
                for _ in range(n_workers)
            ]
            for future in futures:
                future.result()

        return recorder.finish(time.perf_counter() - start_time)

    def _worker(self, dispatcher: JobDispatcher, recorder: SummaryRecorder) -> None:
        """ジョブがなくなるまで取得・生成・実行を繰り返す"""
        while True:
            index = dispatcher.claim()
            if index is None:
                return

            command = self.renderer.render(index)
            outcome = self.executor.execute(command, index)
            recorder.record(outcome)

            if self.progress_callback:
                self.progress_callback(outcome)
