from datetime import datetime, timedelta, timezone

from mindify.utils.datetime_utils import ensure_utc, utc_now


def test_utc_now_is_aware():
    assert utc_now().tzinfo == timezone.utc


def test_utc_now_has_millisecond_precision():
    assert utc_now().microsecond % 1000 == 0


def test_ensure_utc_naive_is_treated_as_utc():
    naive = datetime(2024, 5, 1, 12, 0, 0)

    assert ensure_utc(naive) == datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_ensure_utc_converts_offset():
    local = datetime(2024, 5, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

    result = ensure_utc(local)

    assert result.tzinfo == timezone.utc
    assert result.hour == 12


def test_ensure_utc_none():
    assert ensure_utc(None) is None
