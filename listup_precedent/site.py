# -*- coding: utf-8 -*-
"""裁判所ウェブサイト (判例検索) のURL組み立てとHTML解析。"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .era import EraDate, era_to_uri_encode
from .errors import UnexpectedLinkShapeError

COURTS_DOMAIN = 'https://www.courts.go.jp'
LIST_PATH = '/app/hanrei_jp/list1'
PER_PAGE = 10

SUMMARY_SELECTOR = 'div.module-search-page-paging-parts2 > p'
DETAIL_LINK_SELECTOR = 'table > tbody > tr > th > a'
FIELD_BLOCK_SELECTOR = 'div.module-search-page-table-parts-result-detail > dl'
FIELD_LABEL_SELECTOR = 'dt'
FIELD_TEXT_SELECTOR = 'dd > p'
FIELD_LINK_SELECTOR = 'dd > ul > li > a'

HTML_PARSER = 'lxml'


@dataclass
class RawField:
    """詳細ページの `<dl>` 1つ分。texts は `dd > p` の本文、href は `dd` 内の最初のリンク。"""
    label: str
    texts: List[str] = field(default_factory=list)
    href: Optional[str] = None


def absolute_url(href: str) -> str:
    return urljoin(COURTS_DOMAIN + '/', href)


def build_list_url(start: EraDate, end: EraDate, page: int) -> str:
    # filter[...] の角括弧はエンコード済みで埋め込む
    params = [
        f"page={page}",
        "sort=1",
        "filter%5BjudgeDateMode%5D=2",
        f"filter%5BjudgeGengoFrom%5D={era_to_uri_encode(start.era)}",
        f"filter%5BjudgeYearFrom%5D={start.era_year}",
        f"filter%5BjudgeMonthFrom%5D={start.month}",
        f"filter%5BjudgeDayFrom%5D={start.day}",
        f"filter%5BjudgeGengoTo%5D={era_to_uri_encode(end.era)}",
        f"filter%5BjudgeYearTo%5D={end.era_year}",
        f"filter%5BjudgeMonthTo%5D={end.month}",
        f"filter%5BjudgeDayTo%5D={end.day}",
    ]
    return f"{COURTS_DOMAIN}{LIST_PATH}?" + '&'.join(params)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def find_summary_text(soup: BeautifulSoup) -> Optional[str]:
    """"64297件中11～20件を表示" のような件数表示。見つからなければ None。"""
    el = soup.select_one(SUMMARY_SELECTOR)
    if el is None:
        return None
    return el.get_text()


def iter_detail_links(soup: BeautifulSoup):
    """一覧ページ内の詳細ページへのリンク (href) を文書順に返す。"""
    for a in soup.select(DETAIL_LINK_SELECTOR):
        href = (a.get('href') or '').strip()
        if not href:
            raise UnexpectedLinkShapeError(f'detail anchor without href: {a.get_text(" ", strip=True)!r}')
        yield href


def _field_from_block(block: Tag) -> Optional[RawField]:
    dt = block.select_one(FIELD_LABEL_SELECTOR)
    if dt is None:
        return None
    label = dt.get_text().strip()
    texts = [p.get_text() for p in block.select(FIELD_TEXT_SELECTOR)]
    a = block.select_one(FIELD_LINK_SELECTOR)
    href = None
    if a is not None:
        href = (a.get('href') or '').strip() or None
    return RawField(label, texts, href)


def parse_detail_fields(soup: BeautifulSoup) -> List[RawField]:
    out: List[RawField] = []
    for block in soup.select(FIELD_BLOCK_SELECTOR):
        raw = _field_from_block(block)
        if raw is None:
            logging.debug('Skipping <dl> without <dt>')
            continue
        out.append(raw)
    return out
