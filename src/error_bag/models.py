"""error_bag データモデル"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

# スコープなしを表すマーカー
NO_SCOPE = None

MessageSource = Union[str, Callable[[], str]]


@dataclass
class FieldError:
    """1 件のバリデーションエラー。

    msg に引数なしの callable を渡した場合は regenerate として保持し、
    msg はその初回出力で初期化される。空文字の scope はスコープなしとして扱う。
    """

    id: str
    field: str
    rule: str
    msg: MessageSource
    scope: str | None = NO_SCOPE
    regenerate: Callable[[], str] | None = None

    def __post_init__(self) -> None:
        if self.scope == "":
            self.scope = NO_SCOPE
        if callable(self.msg):
            self.regenerate = self.msg
            self.msg = self.msg()

    @property
    def scoped_name(self) -> str:
        """"scope.field" 形式の名前。スコープなしなら field のみ。"""
        if self.scope is None:
            return self.field
        return f"{self.scope}.{self.field}"
