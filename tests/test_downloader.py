import pytest
import requests

from listup_precedent import downloader as downloader_mod
from listup_precedent.downloader import Downloader, UnexpectedContentType, make_session


def make_response(status, body=b"", content_type="text/html; charset=utf-8"):
    r = requests.Response()
    r.status_code = status
    r._content = body
    r._content_consumed = True
    r.headers["Content-Type"] = content_type
    r.encoding = "utf-8"
    r.url = "https://www.courts.go.jp/x"
    return r


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.responses.pop(0)


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(downloader_mod, "jitter_sleep", lambda *a, **k: None)


def test_retries_server_errors():
    session = FakeSession([make_response(503), make_response(200, "判例".encode("utf-8"))])
    assert Downloader(session).get_text("https://www.courts.go.jp/x") == "判例"
    assert len(session.calls) == 2


def test_gives_up_after_max_attempts():
    session = FakeSession([make_response(500)] * 3)
    with pytest.raises(requests.RequestException):
        Downloader(session, max_attempts=3).get("https://www.courts.go.jp/x")
    assert len(session.calls) == 3


def test_client_errors_are_not_retried():
    session = FakeSession([make_response(404)])
    with pytest.raises(requests.HTTPError):
        Downloader(session).get("https://www.courts.go.jp/x")
    assert len(session.calls) == 1


def test_download_pdf_size_limit():
    big = make_response(200, b"x" * (1024 * 1024 + 10), content_type="application/pdf")
    with pytest.raises(UnexpectedContentType):
        Downloader(FakeSession([big])).download_pdf("https://www.courts.go.jp/a.pdf", max_size_mb=1)


def test_download_pdf_referer():
    session = FakeSession([make_response(200, b"%PDF-1.4", content_type="application/pdf")])
    data, meta = Downloader(session).download_pdf("https://www.courts.go.jp/a.pdf", referer="https://www.courts.go.jp/d")
    assert data == b"%PDF-1.4"
    assert meta["size_bytes"] == 8
    assert session.calls[0][1]["headers"] == {"Referer": "https://www.courts.go.jp/d"}


def test_session_headers():
    session = make_session("ua-test")
    assert session.headers["User-Agent"] == "ua-test"
