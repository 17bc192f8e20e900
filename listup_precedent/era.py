# -*- coding: utf-8 -*-
"""元号付き日付の正規化。

サイトは同じ「日付」を二通りの書式で扱う。
- 検索条件側: `2019/05/01` のような固定幅の数値書式 -> parse_date
- 一覧・詳細ページ側: `令和元年5月1日` のような元号書式 -> parse_date_era_str

元号の境界と基準年は ERA_TABLE だけが持つ。
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import DateRangeError, EraTextFormatError, UnknownEraError


class Era(enum.Enum):
    SHOWA = 'Showa'
    HEISEI = 'Heisei'
    REIWA = 'Reiwa'

    @property
    def label(self) -> str:
        return ERA_TABLE[self].label


@dataclass(frozen=True)
class EraSpan:
    label: str
    base_year: int
    # date key: year*10000 + month*100 + day, 両端を含む
    first_key: int
    last_key: Optional[int]
    uri_encoded: str

    def contains(self, key: int) -> bool:
        if key < self.first_key:
            return False
        return self.last_key is None or key <= self.last_key


ERA_TABLE: Dict[Era, EraSpan] = {
    Era.SHOWA: EraSpan('昭和', 1925, 19261225, 19890107, '%E6%98%AD%E5%92%8C'),
    Era.HEISEI: EraSpan('平成', 1988, 19890108, 20190430, '%E5%B9%B3%E6%88%90'),
    Era.REIWA: EraSpan('令和', 2018, 20190501, None, '%E4%BB%A4%E5%92%8C'),
}

ERA_BY_LABEL: Dict[str, Era] = {span.label: era for era, span in ERA_TABLE.items()}

_ERA_TEXT_RE = re.compile(r"(?P<era>[^0-9]+)(?P<era_year>\d+)年(?P<month>\d+)月(?P<day>\d+)日")
_ERA_TEXT_GAN_RE = re.compile(r"(?P<era>[^0-9]+)元年(?P<month>\d+)月(?P<day>\d+)日")


def date_key(year: int, month: int, day: int) -> int:
    return year * 10000 + month * 100 + day


def era_base_year(era: Era) -> int:
    return ERA_TABLE[era].base_year


def era_to_uri_encode(era: Era) -> str:
    """検索クエリに埋め込む元号名 (UTF-8 パーセントエンコード済み)。"""
    return ERA_TABLE[era].uri_encoded


def era_for_key(key: int) -> Era:
    for era, span in ERA_TABLE.items():
        if span.contains(key):
            return era
    raise DateRangeError(f'date out of supported eras: {key}')


@dataclass(frozen=True, eq=False)
class EraDate:
    era: Era
    era_year: int
    year: int
    month: int
    day: int

    @property
    def key(self) -> int:
        return date_key(self.year, self.month, self.day)

    def ymd(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EraDate):
            return NotImplemented
        return self.ymd() == other.ymd()

    def __hash__(self) -> int:
        return hash(self.ymd())

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}/{self.day:02d}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'era': self.era.value,
            'era_year': self.era_year,
            'year': self.year,
            'month': self.month,
            'day': self.day,
        }


def _check_month_day(month: int, day: int) -> None:
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise DateRangeError(f'month/day out of range: {month}/{day}')


def validate(date: EraDate) -> EraDate:
    """元号と西暦年の整合、および元号の期間内であることを確認する。"""
    _check_month_day(date.month, date.day)
    if date.era_year < 1 or date.year != era_base_year(date.era) + date.era_year:
        raise DateRangeError(f'era year mismatch: {date.era.label}{date.era_year} / {date.year}')
    if not ERA_TABLE[date.era].contains(date.key):
        raise DateRangeError(f'{date} is outside {date.era.label}')
    return date


def parse_date(s: str) -> EraDate:
    """`yyyy/mm/dd` 形式 (区切り文字は任意の1文字) を固定幅で切り出して解釈する。"""
    s = (s or '').strip()
    year_str, month_str, day_str = s[0:4], s[5:7], s[8:10]
    if not (len(year_str) == 4 and len(month_str) == 2 and len(day_str) == 2):
        raise DateRangeError(f'malformed date: {s!r}')
    if not (year_str.isdigit() and month_str.isdigit() and day_str.isdigit()):
        raise DateRangeError(f'malformed date: {s!r}')
    year, month, day = int(year_str), int(month_str), int(day_str)
    _check_month_day(month, day)
    era = era_for_key(date_key(year, month, day))
    return EraDate(era, year - era_base_year(era), year, month, day)


def parse_date_era_str(s: str) -> EraDate:
    """`平成31年4月30日` や `令和元年5月1日` を解釈する。"""
    m = _ERA_TEXT_RE.search(s or '')
    if m:
        era_year = int(m.group('era_year'))
    else:
        m = _ERA_TEXT_GAN_RE.search(s or '')
        if not m:
            raise EraTextFormatError(f'cannot parse era date: {s!r}')
        era_year = 1
    era_name = m.group('era').strip()
    era = ERA_BY_LABEL.get(era_name)
    if era is None:
        raise UnknownEraError(f'unknown era: {era_name!r} in {s!r}')
    month, day = int(m.group('month')), int(m.group('day'))
    return validate(EraDate(era, era_year, era_base_year(era) + era_year, month, day))
