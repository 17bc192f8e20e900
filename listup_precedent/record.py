# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional
from urllib.parse import parse_qsl, urlsplit

from .errors import IncompleteRecordError, UnexpectedLinkShapeError
from .fields import dispatch
from .models import PrecedentInfo, trial_type_from_link
from .site import RawField, absolute_url

REQUIRED_SLOTS = ('date', 'case_number', 'case_name', 'court_name', 'full_pdf_link')


def get_lawsuit_id(url: str) -> str:
    """詳細ページURLの最初のクエリパラメータの値 (`detail2?id=91536` -> "91536")。"""
    pairs = parse_qsl(urlsplit(url).query)
    if not pairs or not pairs[0][1]:
        raise UnexpectedLinkShapeError(f'no id in link: {url!r}')
    return pairs[0][1]


class RecordBuilder:
    """詳細ページ1件分の項目を集め、最後に PrecedentInfo を作る。"""

    def __init__(self, listing_href: str):
        self.trial_type = trial_type_from_link(listing_href)
        self.detail_page_link = absolute_url(listing_href)
        self.lawsuit_id = get_lawsuit_id(self.detail_page_link)
        self.slots: Dict[str, Any] = {}

    def feed(self, label: str, raw: RawField) -> None:
        update = dispatch(label, raw)
        if update is None:
            return
        if update.slot in self.slots:
            logging.info('Field %s appears twice in %s; keeping the later value', update.slot, self.lawsuit_id)
        self.slots[update.slot] = update.value

    def feed_all(self, raws: Iterable[RawField]) -> "RecordBuilder":
        for raw in raws:
            self.feed(raw.label, raw)
        return self

    def check_required(self) -> None:
        for name in REQUIRED_SLOTS:
            if self.slots.get(name) is None:
                raise IncompleteRecordError(name, self.lawsuit_id)

    def build(self, contents: Optional[str] = None) -> PrecedentInfo:
        self.check_required()
        return PrecedentInfo(
            trial_type=self.trial_type,
            lawsuit_id=self.lawsuit_id,
            detail_page_link=self.detail_page_link,
            contents=contents or None,
            **self.slots,
        )
