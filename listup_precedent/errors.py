# -*- coding: utf-8 -*-
"""判例一覧取得で送出される例外。

いずれも実行全体を停止させる。未知のラベルだけは例外にせずログに残す。
"""
from __future__ import annotations

from typing import Optional


class PrecedentError(Exception):
    pass


class DateRangeError(PrecedentError):
    """日付がどの元号の範囲にも入らない、または月日が範囲外。"""


class EraTextFormatError(PrecedentError):
    pass


class UnknownEraError(PrecedentError):
    pass


class MissingRequiredLinkError(PrecedentError):
    pass


class UnexpectedLinkShapeError(PrecedentError):
    pass


class IncompleteRecordError(PrecedentError):
    def __init__(self, field: str, lawsuit_id: Optional[str] = None):
        self.field = field
        self.lawsuit_id = lawsuit_id
        msg = f"required field not set: {field}"
        if lawsuit_id:
            msg += f" (id={lawsuit_id})"
        super().__init__(msg)
