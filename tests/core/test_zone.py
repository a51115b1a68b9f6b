#!filepath: tests/core/test_zone.py
import threading
from datetime import date, datetime, timezone, timedelta, tzinfo
from zoneinfo import ZoneInfo

import pytest

import qstamp.core.zone as zone_mod
from qstamp import LocalZone, Timestamp, ZoneConfigError, get_local_zone, parse_date, set_local_zone, use_local_zone


def test_fixture_pins_shanghai():
    assert get_local_zone().name == "Asia/Shanghai"


def test_from_name_unknown_raises():
    with pytest.raises(ZoneConfigError):
        LocalZone.from_name("Nowhere/Atlantis")


def test_from_name_none_is_system_zone():
    zone = LocalZone.from_name(None)
    assert isinstance(zone, LocalZone)
    assert zone.tz is not None


def test_set_local_zone_accepts_name_tzinfo_and_zone():
    assert set_local_zone("UTC").name == "UTC"
    assert set_local_zone(ZoneInfo("Europe/London")).name == "Europe/London"

    fixed = LocalZone(timezone(timedelta(hours=3)))
    assert set_local_zone(fixed) is fixed
    assert str(Timestamp.zero()) == "1970-01-01 03:00:00.000"


def test_use_local_zone_restores():
    with use_local_zone("UTC") as z:
        assert get_local_zone() is z
        with use_local_zone("America/New_York"):
            assert get_local_zone().name == "America/New_York"
        assert get_local_zone() is z
    assert get_local_zone().name == "Asia/Shanghai"


def test_use_local_zone_restores_on_error():
    with pytest.raises(RuntimeError):
        with use_local_zone("UTC"):
            raise RuntimeError("boom")
    assert get_local_zone().name == "Asia/Shanghai"


def test_use_local_zone_is_context_local():
    seen = {}

    def worker():
        seen["name"] = get_local_zone().name

    with use_local_zone("America/New_York"):
        t = threading.Thread(target=worker)
        t.start()
        t.join()

    # 新线程看到的是进程默认值，而不是上下文覆盖
    assert seen["name"] == "Asia/Shanghai"


def test_default_is_lazy(monkeypatch):
    monkeypatch.setattr(zone_mod, "_default", None)
    monkeypatch.setattr(zone_mod, "get_localzone", lambda: ZoneInfo("Europe/Berlin"))
    assert get_local_zone().name == "Europe/Berlin"


# ================================================================
# localize：DST 策略
# ================================================================
@pytest.fixture
def new_york() -> LocalZone:
    return LocalZone.from_name("America/New_York")


def test_localize_unique(new_york):
    aware = new_york.localize(datetime(2024, 6, 1, 12))
    assert aware.utcoffset() == timedelta(hours=-4)


def test_localize_gap(new_york):
    naive = datetime(2024, 3, 10, 2, 30)
    assert new_york.localize(naive) is None
    lenient = new_york.localize(naive, strict=False)
    assert lenient.utcoffset() == timedelta(hours=-4)
    assert (lenient.hour, lenient.minute) == (3, 30)


def test_localize_fold_lenient_is_earlier(new_york):
    naive = datetime(2024, 11, 3, 1, 30)
    assert new_york.localize(naive) is None
    lenient = new_york.localize(naive, strict=False)
    assert lenient.utcoffset() == timedelta(hours=-4)


def test_start_of(new_york):
    assert new_york.start_of(date(2024, 3, 10)).hour == 0
    sao_paulo = LocalZone.from_name("America/Sao_Paulo")
    assert sao_paulo.start_of(date(2018, 11, 4)).hour == 1


def test_millis_round_trip(sample_ms):
    zone = get_local_zone()
    assert zone.to_millis(zone.to_local(sample_ms)) == sample_ms
    assert zone.to_millis(zone.to_local(-1)) == -1


class _LateEveningGap(tzinfo):
    """
    合成时区：UTC+0 → UTC+1，转换发生在 2030-03-09 23:30 UTC，
    墙钟 23:30 直接跳到次日 00:30，零点落在 gap 中间。
    """
    _switch = datetime(2030, 3, 9, 23, 30)
    _gap_start = datetime(2030, 3, 9, 23, 30)
    _gap_end = datetime(2030, 3, 10, 0, 30)

    def utcoffset(self, dt):
        wall = dt.replace(tzinfo=None, fold=0)
        if wall < self._gap_start:
            return timedelta(0)
        if wall >= self._gap_end:
            return timedelta(hours=1)
        return timedelta(hours=1) if dt.fold else timedelta(0)

    def dst(self, dt):
        return self.utcoffset(dt)

    def tzname(self, dt):
        return "LEG"

    def fromutc(self, dt):
        utc = dt.replace(tzinfo=None)
        if utc < self._switch:
            return utc.replace(tzinfo=self)
        return (utc + timedelta(hours=1)).replace(tzinfo=self)


def test_start_of_when_gap_starts_before_midnight():
    zone = LocalZone(_LateEveningGap())
    start = zone.start_of(date(2030, 3, 10))

    assert start.replace(tzinfo=None) == datetime(2030, 3, 10, 0, 30)
    assert start.astimezone(timezone.utc).replace(tzinfo=None) == datetime(2030, 3, 9, 23, 30)


def test_start_of_day_when_gap_starts_before_midnight():
    with use_local_zone(_LateEveningGap()):
        noon = Timestamp.from_calendar(2030, 3, 10, 12)
        assert str(noon.start_of_day()) == "2030-03-10 00:30:00.000"
        assert str(parse_date("2030-03-10")) == "2030-03-10 00:30:00.000"
        # 前一天不受影响
        assert str(parse_date("2030-03-09")) == "2030-03-09 00:00:00.000"


def test_representable_edges():
    shanghai = get_local_zone()
    assert not shanghai.representable(datetime(1, 1, 1, tzinfo=shanghai.tz))

    east8 = LocalZone(timezone(timedelta(hours=8)))
    assert not east8.representable(datetime(1, 1, 1, 7, 59, tzinfo=east8.tz))
    assert east8.representable(datetime(1, 1, 1, 8, tzinfo=east8.tz))

    new_york = LocalZone.from_name("America/New_York")
    assert not new_york.representable(datetime(9999, 12, 31, 23, tzinfo=new_york.tz))
    assert new_york.representable(datetime(9999, 12, 31, 18, tzinfo=new_york.tz))
