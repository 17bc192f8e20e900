import os
import sys

import pytest
import requests

# Ensure the project root is on sys.path so `listup_precedent` imports without installation
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from listup_precedent.site import absolute_url, build_list_url  # noqa: E402


def listing_html(summary, hrefs):
    rows = "\n".join(
        f'<tr><th><a href="{h}">事件 {i}</a></th><td>...</td></tr>' for i, h in enumerate(hrefs)
    )
    return f"""<html><body>
<div class="module-search-page-paging-parts2"><p>{summary}</p></div>
<table><tbody>
{rows}
</tbody></table>
</body></html>"""


def detail_html(fields, pdf_href="/app/files/hanrei_jp/100/000100_hanrei.pdf"):
    blocks = []
    for label, value in fields:
        if isinstance(value, (list, tuple)):
            ps = "".join(f"<p>{v}</p>" for v in value)
        else:
            ps = f"<p>{value}</p>"
        blocks.append(f"<dl><dt>{label}</dt><dd>{ps}</dd></dl>")
    if pdf_href is not None:
        blocks.append(
            f'<dl><dt>全文</dt><dd><ul><li><a href="{pdf_href}">全文</a></li></ul></dd></dl>'
        )
    return f"""<html><body>
<div class="module-search-page-table-parts-result-detail">
{''.join(blocks)}
</div>
</body></html>"""


def basic_fields(case_number="令和1(あ)100", date="令和元年5月10日", court="最高裁判所第一小法廷"):
    return [
        ("事件番号", case_number),
        ("事件名", "窃盗被告事件"),
        ("裁判年月日", date),
        ("法廷名", court),
        ("裁判種別", "決定"),
        ("結果", "棄却"),
        ("判例集等巻・号・頁", ""),
    ]


class FakeDownloader:
    """URL -> HTML の辞書で応答する。未登録のURLは 404 扱い。"""

    def __init__(self, pages=None, pdfs=None):
        self.pages = dict(pages or {})
        self.pdfs = dict(pdfs or {})
        self.requested = []

    def get_text(self, url, *, referer=None):
        self.requested.append(url)
        if url not in self.pages:
            raise requests.HTTPError(f"404 for {url}")
        return self.pages[url]

    def download_pdf(self, url, *, referer=None, max_size_mb=100):
        self.requested.append(url)
        if url not in self.pdfs:
            raise requests.HTTPError(f"404 for {url}")
        data = self.pdfs[url]
        return data, {"status_code": 200, "content_type": "application/pdf", "size_bytes": len(data)}


@pytest.fixture
def make_site():
    """2ページ3件の検索結果を持つ偽サイトを作る。"""

    def _make(start, end, detail_overrides=None):
        hrefs_page1 = ["/app/hanrei_jp/detail2?id=100", "/app/hanrei_jp/detail4?id=200"]
        hrefs_page2 = ["/app/hanrei_jp/detail7?id=300"]
        pages = {
            build_list_url(start, end, 1): listing_html("11件中1～10件を表示", hrefs_page1),
            build_list_url(start, end, 2): listing_html("11件中11～11件を表示", hrefs_page2),
            absolute_url(hrefs_page1[0]): detail_html(basic_fields("令和1(あ)100")),
            absolute_url(hrefs_page1[1]): detail_html(
                basic_fields("令和1(ワ)200", court="東京地方裁判所\n      民事第1部")
            ),
            absolute_url(hrefs_page2[0]): detail_html(
                basic_fields("令和1(ネ)300", date="令和元年5月20日", court="知的財産高等裁判所")
            ),
        }
        for href, html in (detail_overrides or {}).items():
            pages[absolute_url(href)] = html
        return FakeDownloader(pages)

    return _make
