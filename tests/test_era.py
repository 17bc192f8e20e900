import pytest

from listup_precedent.era import (
    Era,
    EraDate,
    era_base_year,
    era_for_key,
    era_to_uri_encode,
    parse_date,
    parse_date_era_str,
    validate,
)
from listup_precedent.errors import DateRangeError, EraTextFormatError, UnknownEraError


@pytest.mark.parametrize("s", [
    "1926/12/25", "1950/06/15", "1989/01/07", "1989/01/08",
    "2000-02-29", "2019/04/30", "2019/05/01", "2024.12.31",
])
def test_parse_date_reconstructs_year(s):
    d = parse_date(s)
    assert era_base_year(d.era) + d.era_year == d.year
    assert (d.year, d.month, d.day) == (int(s[0:4]), int(s[5:7]), int(s[8:10]))


@pytest.mark.parametrize("key,era", [
    (19261225, Era.SHOWA),
    (19890107, Era.SHOWA),
    (19890108, Era.HEISEI),
    (20190430, Era.HEISEI),
    (20190501, Era.REIWA),
    (20991231, Era.REIWA),
])
def test_era_boundaries(key, era):
    assert era_for_key(key) is era


def test_before_showa_is_out_of_range():
    with pytest.raises(DateRangeError):
        era_for_key(19261224)
    with pytest.raises(DateRangeError):
        parse_date("1926/12/24")


def test_parse_date_values():
    d = parse_date("2019/05/01")
    assert d.era is Era.REIWA
    assert d.era_year == 1
    d = parse_date("1989/01/07")
    assert d.era is Era.SHOWA
    assert d.era_year == 64


@pytest.mark.parametrize("s", ["2019/13/01", "2019/00/10", "2019/05/32", "2019/5/1", "abcd/05/01", ""])
def test_parse_date_rejects_bad_input(s):
    with pytest.raises(DateRangeError):
        parse_date(s)


def test_parse_era_text_gannen():
    d = parse_date_era_str("令和元年5月1日")
    assert d.era is Era.REIWA
    assert (d.era_year, d.year, d.month, d.day) == (1, 2019, 5, 1)


def test_parse_era_text_numeric_year():
    d = parse_date_era_str("平成31年4月30日")
    assert d.era is Era.HEISEI
    assert (d.era_year, d.year, d.month, d.day) == (31, 2019, 4, 30)


def test_parse_era_text_surrounding_whitespace():
    d = parse_date_era_str("  昭和64年1月7日\n")
    assert d.era is Era.SHOWA
    assert d.year == 1989


def test_parse_era_text_unknown_era():
    with pytest.raises(UnknownEraError):
        parse_date_era_str("大正5年1月1日")


@pytest.mark.parametrize("s", ["令和元年5月", "平成三十一年四月三十日", "", "2019/05/01"])
def test_parse_era_text_bad_format(s):
    with pytest.raises(EraTextFormatError):
        parse_date_era_str(s)


def test_parse_era_text_outside_era_range():
    # 平成31年5月1日 は令和
    with pytest.raises(DateRangeError):
        parse_date_era_str("平成31年5月1日")


def test_both_parsers_agree():
    assert parse_date("2019/05/01") == parse_date_era_str("令和元年5月1日")
    assert hash(parse_date("2019/04/30")) == hash(parse_date_era_str("平成31年4月30日"))


def test_validate_rejects_inconsistent_year():
    with pytest.raises(DateRangeError):
        validate(EraDate(Era.REIWA, 2, 2019, 5, 1))


def test_uri_encode():
    assert era_to_uri_encode(Era.SHOWA) == "%E6%98%AD%E5%92%8C"
    assert era_to_uri_encode(Era.HEISEI) == "%E5%B9%B3%E6%88%90"
    assert era_to_uri_encode(Era.REIWA) == "%E4%BB%A4%E5%92%8C"


def test_to_dict():
    assert parse_date("2019/05/01").to_dict() == {
        "era": "Reiwa", "era_year": 1, "year": 2019, "month": 5, "day": 1,
    }
