"""ErrorCollection 実装"""

from __future__ import annotations

import dataclasses
import warnings
from typing import Any, Iterable, Iterator

from .config import ErrorBagConfig
from .exceptions import NotFoundError
from .logger import new_logger
from .models import NO_SCOPE, FieldError, MessageSource
from .selector import CandidateFilters, build_selector, compile_selector

_LEGACY_ADD_WARNING = (
    'This usage of "add()" is deprecated, pass a FieldError or a list of FieldError instead.'
)


class ErrorCollection:
    """フィールド ID ごとにバリデーションエラーを保持するコレクション。

    内部ストアは ID -> エラーリストの dict で、ID の初回追加順を保持する。
    count() は常に flatten() の件数と一致する。
    """

    def __init__(
        self,
        config: ErrorBagConfig | None = None,
        logger: Any | None = None,
    ) -> None:
        self._config = config or ErrorBagConfig()
        self._logger = logger or new_logger(self._config.log)
        self._items: dict[str, list[FieldError]] = {}
        self._length = 0

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.flatten())

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"ErrorCollection(count={self._length}, ids={list(self._items)!r})"

    @property
    def items(self) -> dict[str, list[FieldError]]:
        """内部ストアのコピー。レコードも複製して返す。"""
        return {
            key: [dataclasses.replace(r) for r in records]
            for key, records in self._items.items()
        }

    # --- 追加・更新 ---

    def add(self, error: FieldError | Iterable[FieldError] | str, *legacy: Any) -> None:
        """エラーを追加する。

        旧シグネチャ add(field, msg, rule, scope) も受け付けるが、
        production 以外では DeprecationWarning を出す。
        """
        if legacy:
            error = self._from_legacy(error, *legacy)

        records = self._normalize(error)
        for record in records:
            self._items.setdefault(record.id, []).append(record)
        self._length += len(records)

    def _from_legacy(
        self,
        field: Any,
        msg: MessageSource,
        rule: str | None = None,
        scope: str | None = None,
    ) -> FieldError:
        if not self._config.is_production:
            warnings.warn(_LEGACY_ADD_WARNING, DeprecationWarning, stacklevel=3)
            self._logger.warning("deprecated_add_signature", field=field)

        record = FieldError(id="", field=str(field), rule=rule or "", msg=msg, scope=scope)
        record.id = record.scoped_name
        return record

    @staticmethod
    def _normalize(error: FieldError | Iterable[FieldError]) -> list[FieldError]:
        # 呼び出し側とレコードを共有しないようコピーして取り込む
        if isinstance(error, FieldError):
            return [dataclasses.replace(error)]
        return [dataclasses.replace(e) for e in error]

    def update(self, id: str, error: FieldError) -> None:
        """ID に紐づく全エラーのスコープを error.scope に置き換える。未知の ID は無視。"""
        records = self._items.get(id)
        if not records:
            return

        for record in records:
            record.scope = error.scope or NO_SCOPE

    def regenerate(self) -> None:
        """regenerate を持つエラーのメッセージを再生成する。"""
        for record in self._iter_stored():
            if callable(record.regenerate):
                record.msg = record.regenerate()

    # --- 削除 ---

    def clear(self, scope: str | None = None) -> None:
        """エラーを削除する。

        scope 指定時はそのスコープのエラーのみ削除する
        （scoped_clear=False の場合は scope に関係なく全件）。
        """
        if scope is None or not self._config.scoped_clear:
            for key in list(self._items):
                self._items[key] = []
        else:
            for key, records in list(self._items.items()):
                self._items[key] = [r for r in records if r.scope != scope]

        self._length = sum(len(records) for records in self._items.values())
        self._logger.debug("errors_cleared", scope=scope, remaining=self._length)

    def remove_by_id(self, id: str | Iterable[str]) -> None:
        """ID（または ID のリスト）に紐づくエラーをすべて削除する。

        Raises:
            NotFoundError: strict_remove_by_id=True で ID が存在しない場合
        """
        if not isinstance(id, str):
            for key in id:
                self.remove_by_id(key)
            return

        records = self._items.get(id)
        if records is None:
            if self._config.strict_remove_by_id:
                raise NotFoundError(id)
            self._logger.debug("remove_by_id_unknown", id=id)
            return

        self._items[id] = []
        self._length -= len(records)

    def remove(self, field: str | None, scope: str | None = None) -> None:
        """セレクターの第一候補に一致するエラーをすべて削除する。"""
        if field is None:
            return

        filters = self._filters(field, scope)
        removed = 0
        for key, records in list(self._items.items()):
            kept = [r for r in records if not filters.is_primary(r)]
            removed += len(records) - len(kept)
            self._items[key] = kept
        self._length -= removed

        if removed:
            self._logger.debug("errors_removed", field=field, scope=scope, removed=removed)

    # --- 全体参照 ---

    def flatten(self) -> list[FieldError]:
        """全エラーの複製を ID の追加順に連結したリストで返す。"""
        return [dataclasses.replace(record) for record in self._iter_stored()]

    def _iter_stored(self) -> Iterator[FieldError]:
        for records in self._items.values():
            yield from records

    def count(self) -> int:
        return self._length

    def any(self, scope: str | None = None) -> bool:
        """エラーが存在するか。scope 指定時はそのスコープに限定する。"""
        if scope is None:
            return self._length > 0

        return any(record.scope == scope for record in self._iter_stored())

    def all(self, scope: str | None = None) -> list[str]:
        """全エラーメッセージを返す。scope 指定時はそのスコープに限定する。"""
        if scope is None:
            return [record.msg for record in self._iter_stored()]

        return [record.msg for record in self._iter_stored() if record.scope == scope]

    # --- 問い合わせ ---

    def collect(
        self,
        field: str | None = None,
        scope: str | None = None,
        map_to_message: bool = True,
    ) -> list[Any] | dict[str, list[Any]]:
        """エラーを field 名ごとにまとめる。

        グループが 1 つ以下ならそのリストを（空なら []）、
        複数なら field 名 -> リストの dict を返す。
        map_to_message=False ならメッセージではなく FieldError を返す。
        """
        return self._group(self._candidates(field, scope), map_to_message)

    @staticmethod
    def _group(
        records: list[FieldError], map_to_message: bool
    ) -> list[Any] | dict[str, list[Any]]:
        groups: dict[str, list[Any]] = {}
        for record in records:
            groups.setdefault(record.field, []).append(
                record.msg if map_to_message else dataclasses.replace(record)
            )

        if len(groups) <= 1:
            return next(iter(groups.values()), [])
        return groups

    def first(self, field: str | None, scope: str | None = None) -> str | None:
        """セレクターに一致する最初のエラーメッセージ。なければ None。"""
        if field is None:
            return None

        match = self._filters(field, scope).match(self._iter_stored())
        return match.msg if match is not None else None

    def has(self, field: str | None, scope: str | None = None) -> bool:
        return bool(self.first(field, scope))

    def first_by_id(self, id: str) -> str | None:
        """ID に格納された最初のエラーメッセージ。"""
        records = self._items.get(id)
        return records[0].msg if records else None

    def first_rule(self, field: str | None, scope: str | None = None) -> str | None:
        """一致した最初のエラーのルール名。"""
        candidates = self._candidates(field, scope)
        if not candidates:
            return None
        return candidates[0].rule or None

    def first_by_rule(
        self, field: str | None, rule: str, scope: str | None = None
    ) -> str | None:
        """指定ルールで失敗した最初のエラーメッセージ。"""
        for record in self._candidates(field, scope):
            if record.rule == rule:
                return record.msg or None
        return None

    def first_not(
        self, field: str | None, rule: str = "required", scope: str | None = None
    ) -> str | None:
        """指定ルール以外で失敗した最初のエラーメッセージ。"""
        for record in self._candidates(field, scope):
            if record.rule != rule:
                return record.msg or None
        return None

    def _filters(self, field: str, scope: str | None) -> CandidateFilters:
        return compile_selector(build_selector(field, scope))

    def _candidates(self, field: str | None, scope: str | None) -> list[FieldError]:
        if field is None:
            return list(self._iter_stored())
        return self._filters(field, scope).select(self._iter_stored())
