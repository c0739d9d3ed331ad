"""
Command executor for parel

展開済みコマンドをシェル経由で実行し、成功/失敗を分類して出力する
"""

import logging
import subprocess
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from tqdm import tqdm

from .config import DEFAULT_SHELL


logger = logging.getLogger(__name__)


class JobStatus(Enum):
    """ジョブの実行結果"""
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    LAUNCH_ERROR = "launch_error"


@dataclass(frozen=True)
class JobOutcome:
    """単一ジョブの結果"""
    index: int
    status: JobStatus
    returncode: int | None = None


class OutputChannel:
    """
    ジョブ出力の書き込み先

    1ジョブ分の出力を1回の書き込みとしてロック下で行うため、
    他ジョブの出力と行の途中で混ざることはない。
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        # 未指定時は書き込み時点のsys.stdoutを参照する
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        if not text:
            return
        stream = self.stream
        with self._lock, tqdm.external_write_mode(file=stream):
            stream.write(text)
            stream.flush()


class ErrorChannel(OutputChannel):
    """標準エラー側の書き込み先"""

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr


def tag_lines(text: str, index: int) -> str:
    """各行の先頭にジョブ番号を付与"""
    prefix = f"[job {index}] "
    lines = text.splitlines(keepends=True)
    tagged = "".join(prefix + line for line in lines)
    if tagged and not tagged.endswith("\n"):
        tagged += "\n"
    return tagged


class CommandExecutor:
    """シェル経由のコマンド実行"""

    def __init__(
        self,
        shell: str = DEFAULT_SHELL,
        suppress_output: bool = False,
        out: OutputChannel | None = None,
        err: OutputChannel | None = None,
    ) -> None:
        """
        Args:
            shell: "<shell> -c <command>" として起動するシェル
            suppress_output: ジョブの標準出力/標準エラーを出さない
            out: 成功ジョブの標準出力の書き込み先
            err: 失敗ジョブの標準エラーと警告の書き込み先
        """
        self.shell = shell
        self.suppress_output = suppress_output
        self.out = out if out is not None else OutputChannel()
        self.err = err if err is not None else ErrorChannel()

    def execute(self, command: str, index: int) -> JobOutcome:
        """
        コマンドを実行して結果を出力

        起動失敗を含め、いずれの結果も例外として送出しない。
        """
        try:
            completed = subprocess.run(
                [self.shell, "-c", command],
                stdin=subprocess.DEVNULL,
                capture_output=True,
            )
        except (OSError, ValueError) as e:
            # ValueError: 引数にNULバイトを含むなど、起動前にOSへ渡せない場合
            self.err.write(f"warning: Failed to execute `{command}`: {e}\n")
            logger.debug("job %d could not be launched: %s", index, e)
            return JobOutcome(index=index, status=JobStatus.LAUNCH_ERROR)

        logger.debug("job %d exited with status %d", index, completed.returncode)

        if completed.returncode == 0:
            if not self.suppress_output:
                self.out.write(completed.stdout.decode("utf-8", errors="replace"))
            return JobOutcome(
                index=index, status=JobStatus.SUCCEEDED, returncode=0
            )

        if not self.suppress_output:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            self.err.write(tag_lines(stderr, index))
        return JobOutcome(
            index=index, status=JobStatus.FAILED, returncode=completed.returncode
        )
