"""error_bag ライブラリの例外型定義"""

from __future__ import annotations


class ErrorBagError(Exception):
    """error_bag ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ErrorBagErrorCodes:
    """ErrorBagError のエラーコード定数。"""

    INVALID_SELECTOR: str = "INVALID_SELECTOR"
    ID_NOT_FOUND: str = "ID_NOT_FOUND"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class InvalidSelectorError(ErrorBagError):
    """セレクター文字列が文法に一致しない場合のエラー。"""

    def __init__(self, selector: object) -> None:
        self.selector = selector
        super().__init__(
            ErrorBagErrorCodes.INVALID_SELECTOR,
            f"invalid selector: {selector!r}",
        )


class NotFoundError(ErrorBagError):
    """指定 ID のエラーが格納されていない場合のエラー。"""

    def __init__(self, id: str) -> None:
        self.id = id
        super().__init__(ErrorBagErrorCodes.ID_NOT_FOUND, f"id not found: {id}")
