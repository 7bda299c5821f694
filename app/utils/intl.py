"""
Locale-aware date formatting modelled on the browser's Intl.DateTimeFormat.

Options use the Intl names (dateStyle, month, hour12, timeZone, ...) and
are translated into a CLDR skeleton, which Babel matches against the
locale's available formats. Locale data comes entirely from Babel.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

import pytz
from babel import Locale, UnknownLocaleError
from babel.core import parse_locale
from babel.dates import (
    format_date,
    format_datetime,
    format_time,
    get_datetime_format,
    match_skeleton,
    tokenize_pattern,
    untokenize_pattern,
)

logger = logging.getLogger(__name__)

LocaleLike = Union[str, Locale]

STYLES = ("full", "long", "medium", "short")

# Intl option -> {option value: skeleton field}
FIELD_OPTIONS: Dict[str, Dict[str, str]] = {
    "era": {"long": "GGGG", "short": "G", "narrow": "GGGGG"},
    "year": {"numeric": "y", "2-digit": "yy"},
    "month": {"numeric": "M", "2-digit": "MM", "short": "MMM", "long": "MMMM", "narrow": "MMMMM"},
    "weekday": {"long": "EEEE", "short": "E", "narrow": "EEEEE"},
    "day": {"numeric": "d", "2-digit": "dd"},
    "minute": {"numeric": "m", "2-digit": "mm"},
    "second": {"numeric": "s", "2-digit": "ss"},
    "timeZoneName": {"short": "z", "long": "zzzz"},
}
HOUR_OPTIONS = ("numeric", "2-digit")
HOUR_CYCLES = {"h11": "K", "h12": "h", "h23": "H", "h24": "k"}

# Components whose presence turns off the year/month/day default
DEFAULT_SUPPRESSORS = ("weekday", "year", "month", "day", "hour", "minute", "second")
DATE_FIELDS = "GyMEd"

# Pattern characters grouped by the calendar field they render
FIELD_GROUPS = {
    "G": "G", "y": "y", "M": "M", "L": "M", "E": "E", "c": "E", "e": "E", "d": "d",
    "h": "h", "H": "h", "K": "h", "k": "h", "m": "m", "s": "s", "z": "z", "v": "z", "V": "z",
}


def resolve_locale(locale: LocaleLike) -> Locale:
    """
    Resolve a locale identifier to a Babel Locale.

    Accepts BCP 47 ('en-US') and POSIX ('en_US') separators. A
    well-formed tag that CLDR has no data for, such as 'en-EN', falls
    back to its bare language the way Intl does.

    Raises:
        ValueError: The identifier is not a well-formed locale tag
        UnknownLocaleError: Neither the tag nor its language is known
    """
    if isinstance(locale, Locale):
        return locale
    identifier = str(locale).strip().replace("-", "_")
    try:
        return Locale.parse(identifier)
    except UnknownLocaleError:
        language = parse_locale(identifier)[0]
        if language == identifier:
            raise
        logger.debug(f"No locale data for '{locale}', falling back to '{language}'")
        return Locale.parse(language)


def _prefers_12h(locale: Locale) -> bool:
    short = locale.time_formats["short"].pattern
    return "h" in short or "K" in short


def _hour_char(options: Mapping[str, Any], locale: Locale) -> str:
    if options.get("hour12") is not None:
        if not options["hour12"]:
            return "H"
        return "K" if options.get("hourCycle") == "h11" else "h"
    cycle = options.get("hourCycle")
    if cycle is not None:
        if cycle not in HOUR_CYCLES:
            raise ValueError(f"Value {cycle} out of range for option hourCycle")
        return HOUR_CYCLES[cycle]
    return "h" if _prefers_12h(locale) else "H"


def build_skeleton(options: Mapping[str, Any], locale: Locale) -> str:
    """
    Translate Intl component options into a CLDR skeleton string.

    Without any date or time component the year, month and day are
    requested as numeric fields, matching Intl's defaults.
    """
    fields: Dict[str, str] = {}
    for name, values in FIELD_OPTIONS.items():
        value = options.get(name)
        if value is None:
            continue
        if value not in values:
            raise ValueError(f"Value {value} out of range for option {name}")
        fields[name] = values[value]

    hour = options.get("hour")
    if hour is not None:
        if hour not in HOUR_OPTIONS:
            raise ValueError(f"Value {hour} out of range for option hour")
        char = _hour_char(options, locale)
        fields["hour"] = char * (2 if hour == "2-digit" else 1)

    if not any(options.get(name) is not None for name in DEFAULT_SUPPRESSORS):
        fields.update(year="y", month="M", day="d")

    order = ("era", "year", "month", "weekday", "day", "hour", "minute", "second", "timeZoneName")
    return "".join(fields[name] for name in order if name in fields)


def _split_skeleton(skeleton: str):
    date_part = "".join(ch for ch in skeleton if ch in DATE_FIELDS)
    time_part = "".join(ch for ch in skeleton if ch not in DATE_FIELDS)
    return date_part, time_part


def _requested_widths(skeleton: str) -> Dict[str, tuple]:
    requested = {}
    for kind, value in tokenize_pattern(skeleton):
        if kind == "field" and value[0] in FIELD_GROUPS:
            requested[FIELD_GROUPS[value[0]]] = value
    return requested


def _adjust_pattern(pattern: str, skeleton: str) -> str:
    """Bring the matched pattern's field widths in line with the request."""
    requested = _requested_widths(skeleton)
    tokens = []
    for token in tokenize_pattern(pattern):
        if token[0] != "field" or token[1][0] not in FIELD_GROUPS:
            tokens.append(token)
            continue
        char, width = token[1]
        group = FIELD_GROUPS[char]
        if group not in requested:
            tokens.append(token)
            continue
        wanted_char, wanted = requested[group]
        if group == "M":
            # Numeric and text months are not interchangeable
            if (width > 2) == (wanted > 2):
                width = wanted
        elif group in ("m", "s"):
            width = max(width, wanted)
        elif group in ("h", "z"):
            char, width = wanted_char, wanted
        elif group == "y":
            width = wanted if wanted == 2 else (1 if width == 2 else width)
        else:
            width = wanted
        tokens.append(("field", (char, width)))
    return untokenize_pattern(tokens)


def pattern_for_skeleton(skeleton: str, locale: Locale) -> str:
    """Return the locale's concrete pattern for a skeleton."""
    requested = _requested_widths(skeleton)
    if len(requested) == 1 and ("m" in requested or "s" in requested):
        # A lone minute or second is never padded
        return requested.get("m", requested.get("s"))[0]
    skeletons = locale.datetime_skeletons
    if skeleton in skeletons:
        return skeletons[skeleton].pattern
    match = match_skeleton(skeleton, skeletons)
    if match is None and len(requested) == 1:
        # A lone field such as a zone name is a valid pattern by itself
        return skeleton
    if match is None:
        match = match_skeleton(skeleton, skeletons, allow_different_fields=True)
    if match is None:
        raise ValueError(f"No pattern available for skeleton '{skeleton}' in locale {locale}")
    return _adjust_pattern(skeletons[match].pattern, skeleton)


def _join_length(date_skeleton: str) -> str:
    if "MMMM" in date_skeleton:
        return "full" if "E" in date_skeleton else "long"
    if "MMM" in date_skeleton:
        return "medium"
    return "short"


def _join(date_text: str, time_text: str, length: str, locale: Locale) -> str:
    return (
        get_datetime_format(length, locale=locale)
        .replace("'", "")
        .replace("{0}", time_text)
        .replace("{1}", date_text)
    )


def _format_styles(value: datetime, options: Mapping[str, Any], locale: Locale) -> str:
    date_style = options.get("dateStyle")
    time_style = options.get("timeStyle")
    for name, style in (("dateStyle", date_style), ("timeStyle", time_style)):
        if style is not None and style not in STYLES:
            raise ValueError(f"Value {style} out of range for option {name}")

    date_text = format_date(value, date_style, locale=locale) if date_style else None
    time_text = format_time(value, time_style, locale=locale) if time_style else None
    if date_text and time_text:
        return _join(date_text, time_text, date_style, locale)
    return date_text or time_text


def format_datetime_intl(
    value: datetime,
    locale: LocaleLike = "en-EN",
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Format a datetime the way Intl.DateTimeFormat(locale, options) would.

    The value is rendered in its own timezone unless a timeZone option
    names another one. Option keys Intl does not know are ignored.

    Args:
        value: Timezone-aware datetime to format
        locale: Locale identifier or babel.Locale
        options: Intl.DateTimeFormat options mapping

    Returns:
        Formatted string

    Raises:
        ValueError: Malformed locale tag or out-of-range option value
        TypeError: dateStyle/timeStyle mixed with component options
        UnknownLocaleError: Locale not available
        pytz.UnknownTimeZoneError: Unknown timeZone option
    """
    options = dict(options or {})
    resolved = resolve_locale(locale)

    zone = options.get("timeZone")
    if zone:
        tz = pytz.timezone(zone)
        value = tz.normalize(value.astimezone(tz))

    if options.get("dateStyle") or options.get("timeStyle"):
        components = [name for name in (*FIELD_OPTIONS, "hour") if options.get(name) is not None]
        if components:
            raise TypeError(f"Can't set option {components[0]} when dateStyle or timeStyle is used")
        return _format_styles(value, options, resolved)

    skeleton = build_skeleton(options, resolved)
    date_skeleton, time_skeleton = _split_skeleton(skeleton)

    date_text = time_text = None
    if date_skeleton:
        date_text = format_datetime(value, pattern_for_skeleton(date_skeleton, resolved), locale=resolved)
    if time_skeleton:
        time_text = format_datetime(value, pattern_for_skeleton(time_skeleton, resolved), locale=resolved)

    if date_text and time_text:
        return _join(date_text, time_text, _join_length(date_skeleton), resolved)
    return date_text or time_text
