"""セレクター文字列の解析とマッチ条件の生成

文法::

    selector := "#" id-prefix [":" rule]
              | [scope "."] (field | "*") [":" rule]

scope はドットを含まない 1 セグメント、field はドット区切りの名前を許す。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from .exceptions import InvalidSelectorError
from .models import FieldError

WILDCARD = "*"

_SEGMENT = r"[\w\- ]+"
_NAME_RE = re.compile(
    rf"(?:(?P<scope>{_SEGMENT})\.)?"
    rf"(?P<field>\*|{_SEGMENT}(?:\.{_SEGMENT})*)"
    r"(?::(?P<rule>\w+))?"
)
_ID_RE = re.compile(r"#(?P<id>[^:]+)(?::(?P<rule>\w+))?")

Predicate = Callable[[FieldError], bool]


@dataclass(frozen=True)
class Selector:
    """解析済みセレクター。id が None でなければ id モード。"""

    field: str | None = None
    scope: str | None = None
    rule: str | None = None
    id: str | None = None

    @property
    def is_id_mode(self) -> bool:
        return self.id is not None

    @property
    def is_wildcard(self) -> bool:
        return self.field == WILDCARD


def build_selector(field: str, scope: str | None = None) -> str:
    """field と scope からセレクター文字列を組み立てる。空文字の scope は省略扱い。"""
    if not scope:
        return str(field)
    return f"{scope}.{field}"


def parse_selector(selector: str) -> Selector:
    """セレクター文字列を Selector に変換する。

    Raises:
        InvalidSelectorError: 文法に一致しない場合
    """
    if not isinstance(selector, str):
        raise InvalidSelectorError(selector)

    if selector.startswith("#"):
        m = _ID_RE.fullmatch(selector)
        if m is None:
            raise InvalidSelectorError(selector)
        return Selector(id=m.group("id"), rule=m.group("rule"))

    m = _NAME_RE.fullmatch(selector)
    if m is None:
        raise InvalidSelectorError(selector)
    return Selector(
        field=m.group("field"),
        scope=m.group("scope"),
        rule=m.group("rule"),
    )


@dataclass(frozen=True)
class CandidateFilters:
    """第一候補と代替候補の判定関数の組。"""

    is_primary: Predicate
    is_alt: Predicate

    def select(self, records: Iterable[FieldError]) -> list[FieldError]:
        """第一候補が 1 件でもあればそれらを、なければ代替候補を返す。"""
        primary: list[FieldError] = []
        alt: list[FieldError] = []
        for record in records:
            if self.is_primary(record):
                primary.append(record)
            if self.is_alt(record):
                alt.append(record)
        return primary if primary else alt

    def match(self, records: Iterable[FieldError]) -> FieldError | None:
        """最初の第一候補を返す。なければ最後に見つかった代替候補を返す。"""
        alt: FieldError | None = None
        for record in records:
            if self.is_primary(record):
                return record
            if self.is_alt(record):
                alt = record
        return alt


def _never(_: FieldError) -> bool:
    return False


def compile_selector(selector: str | Selector) -> CandidateFilters:
    """セレクターから CandidateFilters を生成する。"""
    parsed = selector if isinstance(selector, Selector) else parse_selector(selector)
    rule = parsed.rule

    def matches_rule(record: FieldError) -> bool:
        return rule is None or record.rule == rule

    if parsed.is_id_mode:
        prefix = parsed.id or ""

        def is_id_primary(record: FieldError) -> bool:
            return matches_rule(record) and record.id.startswith(prefix)

        return CandidateFilters(is_primary=is_id_primary, is_alt=_never)

    scope = parsed.scope
    field = parsed.field

    def is_primary(record: FieldError) -> bool:
        if not matches_rule(record):
            return False
        # scope 省略時はスコープなしのエラーだけに一致する
        if record.scope != scope:
            return False
        return parsed.is_wildcard or record.field == field

    if scope is None:
        return CandidateFilters(is_primary=is_primary, is_alt=_never)

    dotted = f"{scope}.{field}"

    def is_alt(record: FieldError) -> bool:
        return matches_rule(record) and record.field == dotted

    return CandidateFilters(is_primary=is_primary, is_alt=is_alt)
