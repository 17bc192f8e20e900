#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Crawler：裁判所ウェブサイトの判例検索を裁判年月日で絞り込み -> 一覧ページを順に巡回
-> 詳細ページの項目を抽出 -> JSON 出力

特徴
- 一覧ページは1ページ10件。最初のページの「N件中…」表示から総ページ数を求める
- 一覧の順序 (ページ順、ページ内の文書順) のまま出力する
- 元号付き日付 (令和元年5月1日 など) は Era / 元号年 / 西暦年月日に正規化する
- --fetch-contents を付けると判決文PDFも取得し、本文テキストを contents に入れる

用法
    listup-precedent --start 2019/05/01 --end 2019/05/31 --output precedents.json

    # 1件1ファイル + インデックス
    listup-precedent -s 2019/05/01 -e 2019/05/31 -o ./data/records -i ./data/index.jsonl

エラー
    日付の解釈失敗・必須項目の欠落・通信エラーはいずれも実行全体を止める
    (それまでに書いた分は閉じた状態で残る)。
"""
from __future__ import annotations

import argparse
import logging
import re
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import requests

from .downloader import DEFAULT_USER_AGENT, Downloader, make_session
from .emitter import JsonArrayWriter, PerRecordWriter
from .era import EraDate, parse_date
from .errors import PrecedentError
from .models import PrecedentInfo
from .pdf_text import PDFExtractor
from .record import RecordBuilder
from .site import (
    PER_PAGE,
    build_list_url,
    find_summary_text,
    iter_detail_links,
    parse_detail_fields,
    parse_html,
)

DEFAULT_INTERVAL = 0.5

_DIGITS_RE = re.compile(r"\d+")


# ----------------------------- ページ数の計算 -----------------------------

def parse_total_count(text: str) -> int:
    """"64297件中1～10件を表示" -> 64297"""
    m = _DIGITS_RE.search(text or '')
    if not m:
        raise PrecedentError(f'no result count in listing summary: {text!r}')
    return int(m.group(0))


def page_count(total: int, per_page: int = PER_PAGE) -> int:
    return -(-total // per_page)


# ----------------------------- 巡回 -----------------------------

@dataclass
class RunStats:
    total: int = 0
    pages: int = 0
    written: int = 0
    with_contents: int = 0


class PrecedentCrawler:
    def __init__(self, downloader: Downloader, start: EraDate, end: EraDate, *,
                 interval: float = DEFAULT_INTERVAL, extractor: Optional[PDFExtractor] = None):
        self.downloader = downloader
        self.start = start
        self.end = end
        self.interval = interval
        self.extractor = extractor
        self.stats = RunStats()

    def fetch_listing(self, page: int) -> str:
        url = build_list_url(self.start, self.end, page)
        logging.info('page_num: %d (%s)', page, url)
        return self.downloader.get_text(url)

    def count_pages(self, first_html: str) -> int:
        text = find_summary_text(parse_html(first_html))
        if text is None:
            logging.warning('No result summary on the first listing page; assuming no results')
            return 0
        self.stats.total = parse_total_count(text)
        return page_count(self.stats.total)

    def fetch_contents(self, extractor: PDFExtractor, pdf_url: str, referer: str) -> Optional[str]:
        pdf_bytes, meta = self.downloader.download_pdf(pdf_url, referer=referer)
        logging.info('PDF %s: %s bytes (%s)', pdf_url, meta.get('size_bytes'), meta.get('content_type'))
        return extractor.extract_text(pdf_bytes)

    def fetch_record(self, href: str) -> PrecedentInfo:
        builder = RecordBuilder(href)
        logging.info('START record: %s', builder.lawsuit_id)
        html = self.downloader.get_text(builder.detail_page_link)
        builder.feed_all(parse_detail_fields(parse_html(html)))
        # 必須項目が欠けていればPDFを取りに行く前に止める
        builder.check_required()
        contents = None
        if self.extractor is not None:
            contents = self.fetch_contents(self.extractor, builder.slots['full_pdf_link'], builder.detail_page_link)
        info = builder.build(contents=contents)
        if info.contents is not None:
            self.stats.with_contents += 1
        return info

    def iter_records(self) -> Iterator[PrecedentInfo]:
        first_html = self.fetch_listing(1)
        pages = self.count_pages(first_html)
        self.stats.pages = pages
        logging.info('total: %d records, %d pages', self.stats.total, pages)
        for page in range(1, pages + 1):
            html = first_html if page == 1 else self.fetch_listing(page)
            try:
                hrefs = list(iter_detail_links(parse_html(html)))
            except PrecedentError as e:
                logging.error('FAILED page=%d: %s', page, e)
                raise
            for href in hrefs:
                try:
                    info = self.fetch_record(href)
                except (PrecedentError, requests.RequestException) as e:
                    logging.error('FAILED page=%d link=%s: %s', page, href, e)
                    raise
                yield info
            if self.interval > 0:
                time.sleep(self.interval)


def run(crawler: PrecedentCrawler, writer) -> RunStats:
    with writer:
        for info in crawler.iter_records():
            writer.write(info)
            crawler.stats.written += 1
            logging.info('SUCCESS record: %s', info.lawsuit_id)
    return crawler.stats


# ----------------------------- main -----------------------------

def init_logger(log_file: Optional[Path] = None) -> None:
    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog='listup-precedent',
        description='裁判所ウェブサイトの判例検索から判例の一覧データを作る',
    )
    ap.add_argument('-s', '--start', required=True, help='取得する裁判年月日の開始 (yyyy/mm/dd)')
    ap.add_argument('-e', '--end', required=True, help='取得する裁判年月日の終了 (yyyy/mm/dd)')
    ap.add_argument('-o', '--output', type=Path, required=True,
                    help='出力先。--index なしならJSON配列ファイル、ありなら1件1ファイルのディレクトリ')
    ap.add_argument('-i', '--index', type=Path, default=None, help='インデックス (JSON Lines) の出力先')
    ap.add_argument('--interval', type=float, default=DEFAULT_INTERVAL,
                    help='一覧ページ1枚を処理し終えるごとの待ち時間 (秒)')
    ap.add_argument('--user-agent', type=str, default=DEFAULT_USER_AGENT)
    ap.add_argument('--fetch-contents', action='store_true', help='判決文PDFを取得して本文を contents に入れる')
    ap.add_argument('--log-file', type=Path, default=None)
    return ap


def main(argv: Optional[list] = None) -> None:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        start_date = parse_date(args.start)
        end_date = parse_date(args.end)
    except PrecedentError as e:
        ap.error(str(e))
    if end_date.key < start_date.key:
        ap.error(f'end date {end_date} is before start date {start_date}')
    if args.interval < 0:
        ap.error('--interval must be >= 0')

    init_logger(args.log_file)
    logging.info('start_date: %s (%s%d)', start_date, start_date.era.label, start_date.era_year)
    logging.info('end_date: %s (%s%d)', end_date, end_date.era.label, end_date.era_year)

    downloader = Downloader(make_session(args.user_agent))
    extractor = PDFExtractor() if args.fetch_contents else None
    crawler = PrecedentCrawler(downloader, start_date, end_date, interval=args.interval, extractor=extractor)
    if args.index is not None:
        writer = PerRecordWriter(args.output, args.index)
    else:
        writer = JsonArrayWriter(args.output)

    try:
        stats = run(crawler, writer)
    except (PrecedentError, requests.RequestException) as e:
        logging.error('RUN ABORTED after %d records: %s', crawler.stats.written, e)
        raise SystemExit(1)

    logging.info('RUN DONE: total=%d pages=%d written=%d with_contents=%d',
                 stats.total, stats.pages, stats.written, stats.with_contents)


if __name__ == '__main__':
    main()
