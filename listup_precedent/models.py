# -*- coding: utf-8 -*-
from __future__ import annotations

import enum
import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .era import EraDate
from .errors import UnexpectedLinkShapeError

# 詳細ページのリンク `/app/hanrei_jp/detail2?id=91536` の "2" の部分
_TRIAL_TYPE_RE = re.compile(r"[^\d]+(?P<type_number>\d)")


class TrialType(enum.Enum):
    SUPREME_COURT = 'SupremeCourt'
    HIGH_COURT = 'HighCourt'
    LOWER_COURT = 'LowerCourt'
    ADMINISTRATIVE_CASE = 'AdministrativeCase'
    LABOR_CASE = 'LaborCase'
    IP_CASE = 'IPCase'


TRIAL_TYPE_BY_CODE: Dict[int, TrialType] = {
    2: TrialType.SUPREME_COURT,
    3: TrialType.HIGH_COURT,
    4: TrialType.LOWER_COURT,
    5: TrialType.ADMINISTRATIVE_CASE,
    6: TrialType.LABOR_CASE,
    7: TrialType.IP_CASE,
}


def trial_type_from_link(link: str) -> TrialType:
    m = _TRIAL_TYPE_RE.match(link or '')
    if not m:
        raise UnexpectedLinkShapeError(f'no trial type digit in link: {link!r}')
    code = int(m.group('type_number'))
    try:
        return TRIAL_TYPE_BY_CODE[code]
    except KeyError:
        raise UnexpectedLinkShapeError(f'unknown trial type {code} in link: {link!r}') from None


@dataclass(frozen=True)
class PrecedentInfo:
    """詳細ページ1件分の判例情報。任意項目は値がなければ None。"""
    trial_type: TrialType
    date: EraDate
    case_number: str
    case_name: str
    court_name: str
    lawsuit_id: str
    detail_page_link: str
    full_pdf_link: str
    right_type: Optional[str] = None
    lawsuit_type: Optional[str] = None
    result_type: Optional[str] = None
    result: Optional[str] = None
    article_info: Optional[str] = None
    original_court_name: Optional[str] = None
    original_case_number: Optional[str] = None
    original_result: Optional[str] = None
    original_date: Optional[EraDate] = None
    field: Optional[str] = None
    gist: Optional[str] = None
    case_gist: Optional[str] = None
    ref_law: Optional[str] = None
    contents: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, EraDate):
                value = value.to_dict()
            elif isinstance(value, TrialType):
                value = value.value
            out[f.name] = value
        return out

    def summary(self) -> Dict[str, Any]:
        """インデックスファイル用の要約。"""
        return {
            'trial_type': self.trial_type.value,
            'date': self.date.to_dict(),
            'case_number': self.case_number,
            'court_name': self.court_name,
            'lawsuit_id': self.lawsuit_id,
        }
