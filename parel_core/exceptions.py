"""
Exception classes for parel
"""


class ParelError(Exception):
    """parelの基底例外クラス"""
    pass


class ConfigurationError(ParelError):
    """実行前の設定検証に関するエラー"""
    pass


class DuplicateIdentifierError(ConfigurationError):
    """識別子が重複している"""
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"file identifier '{identifier}' already exists")


class IdentifierNotInCommandError(ConfigurationError):
    """識別子がコマンド中に存在しない"""
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"wordlist name '{identifier}' is not in command")


class ShowIndexOutOfRangeError(ConfigurationError):
    """--show の値が組み合わせ総数以上"""
    def __init__(self, index: int, n_total: int) -> None:
        self.index = index
        self.n_total = n_total
        super().__init__(
            f"show parameter {index} must be less than {n_total}"
        )


class WordlistLoadError(ParelError):
    """ワードリストの読み込みに失敗した"""
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")


class IndexOutOfRangeError(ParelError, ValueError):
    """線形インデックスが有効範囲外"""
    def __init__(self, index: int, n_total: int) -> None:
        self.index = index
        self.n_total = n_total
        super().__init__(
            f"index out of range: {index}, valid range=[0, {n_total})"
        )
