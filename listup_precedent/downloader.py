# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import random
import time
from typing import Any, Dict, List, Optional, Tuple

import requests

DEFAULT_USER_AGENT = 'listup-precedent/0.1'
REQUEST_TIMEOUT = 30


class UnexpectedContentType(requests.RequestException):
    pass


def jitter_sleep(base: float, jitter: float = 0.5) -> None:
    time.sleep(base + random.random() * jitter)


def make_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    session = requests.Session()
    session.headers.update({
        'User-Agent': user_agent,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'ja,en;q=0.8',
    })
    return session


class Downloader:
    """HTTP取得。429/5xx のみ指数バックオフで再試行し、それ以外の失敗はそのまま送出する。"""

    def __init__(self, session: requests.Session, max_attempts: int = 3):
        self.session = session
        self.max_attempts = max_attempts

    def get(self, url: str, *, referer: Optional[str] = None, stream: bool = False) -> requests.Response:
        headers: Dict[str, str] = {}
        if referer:
            headers['Referer'] = referer
        last_exc: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                resp = self.session.get(url, headers=headers, timeout=REQUEST_TIMEOUT, allow_redirects=True, stream=stream)
                if resp.status_code == 429 or 500 <= resp.status_code < 600:
                    raise requests.RequestException(f"HTTP {resp.status_code} for {url}")
                resp.raise_for_status()
                return resp
            except requests.HTTPError:
                raise
            except requests.RequestException as e:
                last_exc = e
                if attempt == self.max_attempts:
                    raise
                logging.warning('Request attempt %d failed for %s: %s', attempt, url, e)
                jitter_sleep(min(30, 2 ** (attempt - 1)))
        raise last_exc or requests.RequestException('request failed')

    def get_text(self, url: str, *, referer: Optional[str] = None) -> str:
        resp = self.get(url, referer=referer)
        if not resp.encoding or resp.encoding.lower() == 'iso-8859-1':
            resp.encoding = resp.apparent_encoding or 'utf-8'
        return resp.text

    def download_pdf(self, url: str, *, referer: Optional[str] = None, max_size_mb: int = 100) -> Tuple[bytes, Dict[str, Any]]:
        resp = self.get(url, referer=referer, stream=True)
        ctype = resp.headers.get('Content-Type') or ''
        if 'pdf' not in ctype.lower():
            logging.warning('Unexpected Content-Type for %s: %s', url, ctype)
        total = 0
        chunks: List[bytes] = []
        limit = max_size_mb * 1024 * 1024
        for chunk in resp.iter_content(chunk_size=65536):
            if chunk:
                chunks.append(chunk)
                total += len(chunk)
                if total > limit:
                    resp.close()
                    raise UnexpectedContentType(f'File too large: > {max_size_mb} MB')
        meta = {
            'status_code': resp.status_code,
            'content_type': ctype,
            'size_bytes': total,
        }
        return b''.join(chunks), meta
