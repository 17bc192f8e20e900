# -*- coding: utf-8 -*-
"""詳細ページのラベルから PrecedentInfo の項目への振り分け。

ラベルの対応は FIELD_TABLE にデータとして持つ。同義のラベルを増やすときは
表に行を足すだけでよい。表にないラベルは警告を出して読み飛ばす。
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .era import parse_date_era_str
from .errors import (
    DateRangeError,
    EraTextFormatError,
    MissingRequiredLinkError,
    UnknownEraError,
)
from .site import RawField, absolute_url

TEXT = 'text'
DATE = 'date'
OPTIONAL_DATE = 'optional_date'
LINK = 'link'


def clean_text(s: str) -> str:
    return s.strip()


def remove_line_break(s: str) -> str:
    """各行の前後の空白を除いて連結する (裁判所名など改行を含む値用)。"""
    return ''.join(line.strip() for line in s.strip().splitlines())


@dataclass(frozen=True)
class FieldSpec:
    slot: str
    kind: str = TEXT
    clean: Callable[[str], str] = clean_text


@dataclass(frozen=True)
class SlotUpdate:
    slot: str
    value: Any


_COURT_NAME = FieldSpec('court_name', clean=remove_line_break)
_ARTICLE_INFO = FieldSpec('article_info')
_GIST = FieldSpec('gist')

FIELD_TABLE: Dict[str, FieldSpec] = {
    '事件番号': FieldSpec('case_number'),
    '事件名': FieldSpec('case_name'),
    '裁判年月日': FieldSpec('date', kind=DATE),
    '裁判所名': _COURT_NAME,
    '裁判所名・部': _COURT_NAME,
    '法廷名': _COURT_NAME,
    '権利種別': FieldSpec('right_type'),
    '訴訟類型': FieldSpec('lawsuit_type'),
    '裁判種別': FieldSpec('result_type'),
    '結果': FieldSpec('result'),
    '判例集等巻・号・頁': _ARTICLE_INFO,
    '高裁判例集登載巻・号・頁': _ARTICLE_INFO,
    '原審裁判所名': FieldSpec('original_court_name', clean=remove_line_break),
    '原審事件番号': FieldSpec('original_case_number'),
    '原審結果': FieldSpec('original_result'),
    '原審裁判年月日': FieldSpec('original_date', kind=OPTIONAL_DATE),
    '分野': FieldSpec('field'),
    '判示事項の要旨': _GIST,
    '判示事項': _GIST,
    '裁判要旨': FieldSpec('case_gist'),
    '参照法条': FieldSpec('ref_law'),
    '全文': FieldSpec('full_pdf_link', kind=LINK),
}


def joined_text(raw: RawField) -> str:
    """複数の `<p>` は空のものを除いて改行で連結する。"""
    parts = [t.strip() for t in raw.texts]
    return '\n'.join(p for p in parts if p)


def dispatch(label: str, raw: RawField) -> Optional[SlotUpdate]:
    spec = FIELD_TABLE.get(label)
    if spec is None:
        logging.warning('Unknown field label: %r', label)
        return None

    if spec.kind == LINK:
        if not raw.href:
            raise MissingRequiredLinkError(f'no link for field {label!r}')
        return SlotUpdate(spec.slot, absolute_url(raw.href))

    text = spec.clean(joined_text(raw))
    if not text:
        return None

    if spec.kind == DATE:
        return SlotUpdate(spec.slot, parse_date_era_str(text))
    if spec.kind == OPTIONAL_DATE:
        try:
            return SlotUpdate(spec.slot, parse_date_era_str(text))
        except (EraTextFormatError, UnknownEraError, DateRangeError) as e:
            logging.warning('Ignoring unparsable %s %r: %s', label, text, e)
            return None
    return SlotUpdate(spec.slot, text)
