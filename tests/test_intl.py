from datetime import datetime

import pytest
import pytz
from babel import Locale, UnknownLocaleError

from utils.intl import build_skeleton, format_datetime_intl, resolve_locale

EN = Locale("en")


def at(*args, tz=pytz.UTC):
    return tz.localize(datetime(*args))


def plain(text):
    # Newer CLDR data puts a narrow no-break space before AM/PM
    return text.replace("\u202f", " ")


def test_resolve_locale_accepts_both_separators():
    assert str(resolve_locale("it-IT")) == "it_IT"
    assert str(resolve_locale("it_IT")) == "it_IT"


def test_resolve_locale_falls_back_to_language():
    assert resolve_locale("en-EN").language == "en"


def test_resolve_locale_passes_locale_through():
    assert resolve_locale(EN) is EN


def test_resolve_locale_errors():
    with pytest.raises(UnknownLocaleError):
        resolve_locale("xx")
    with pytest.raises(ValueError):
        resolve_locale("not a locale!")


def test_build_skeleton_defaults():
    assert build_skeleton({}, EN) == "yMd"
    assert build_skeleton({"timeZoneName": "short"}, EN) == "yMdz"


def test_build_skeleton_hour_cycle():
    assert build_skeleton({"hour": "numeric"}, EN) == "h"
    assert build_skeleton({"hour": "numeric", "hour12": False}, EN) == "H"
    assert build_skeleton({"hour": "2-digit", "hourCycle": "h23"}, EN) == "HH"
    assert build_skeleton({"hour": "numeric"}, Locale("de")) == "H"


def test_build_skeleton_orders_fields():
    options = {"day": "2-digit", "weekday": "short", "month": "short", "year": "numeric"}
    assert build_skeleton(options, EN) == "yMMMEdd"


def test_time_only():
    value = at(2024, 3, 1, 15, 5)
    assert plain(format_datetime_intl(value, "en", {"hour": "numeric", "minute": "2-digit"})) == "3:05 PM"
    assert format_datetime_intl(value, "en", {"hour": "numeric", "minute": "2-digit", "hour12": False}) == "15:05"


def test_lone_minute_or_second_is_not_padded():
    value = at(2024, 3, 1, 15, 5, 7)
    assert format_datetime_intl(value, "en", {"minute": "numeric"}) == "5"
    assert format_datetime_intl(value, "en", {"minute": "2-digit"}) == "5"
    assert format_datetime_intl(value, "it", {"second": "numeric"}) == "7"


def test_minute_with_hour_stays_padded():
    value = at(2024, 3, 1, 15, 5)
    assert format_datetime_intl(value, "en", {"hour": "numeric", "minute": "numeric", "hour12": False}) == "15:05"


def test_date_and_time_are_joined():
    options = {"year": "numeric", "month": "short", "day": "numeric", "hour": "numeric", "minute": "2-digit"}
    result = format_datetime_intl(at(2024, 3, 1, 15, 5), "en", options)
    assert result.startswith("Mar 1, 2024")
    assert plain(result).endswith("3:05 PM")


def test_weekday_long():
    assert format_datetime_intl(at(2024, 3, 1), "en", {"weekday": "long"}) == "Friday"


def test_two_digit_fields():
    options = {"year": "numeric", "month": "2-digit", "day": "2-digit"}
    assert format_datetime_intl(at(2024, 3, 1), "en", options) == "03/01/2024"


def test_date_style():
    assert format_datetime_intl(at(2024, 3, 1), "en", {"dateStyle": "long"}) == "March 1, 2024"
    assert format_datetime_intl(at(2024, 3, 1), "en", {"dateStyle": "short"}) == "3/1/24"


def test_date_and_time_style():
    result = format_datetime_intl(at(2024, 3, 1, 15, 5), "en", {"dateStyle": "medium", "timeStyle": "short"})
    assert result.startswith("Mar 1, 2024")
    assert plain(result).endswith("3:05 PM")


def test_time_zone_option_converts():
    value = at(2024, 3, 1, 12, 0)
    assert format_datetime_intl(value, "en", {"timeZone": "Asia/Tokyo", "hour": "numeric", "hour12": False}) == "21"


def test_unknown_option_keys_are_ignored():
    assert format_datetime_intl(at(2024, 3, 1), "en", {"calendar": "gregory"}) == "3/1/2024"


def test_style_with_components_is_rejected():
    with pytest.raises(TypeError):
        format_datetime_intl(at(2024, 3, 1), "en", {"dateStyle": "long", "month": "short"})


@pytest.mark.parametrize(
    "options",
    [{"month": "huge"}, {"hour": "three"}, {"dateStyle": "tiny"}, {"hour": "numeric", "hourCycle": "h25"}],
)
def test_out_of_range_values(options):
    with pytest.raises(ValueError):
        format_datetime_intl(at(2024, 3, 1), "en", options)


def test_unknown_time_zone():
    with pytest.raises(pytz.UnknownTimeZoneError):
        format_datetime_intl(at(2024, 3, 1), "en", {"timeZone": "Mars/Olympus"})
