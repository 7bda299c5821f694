"""
Utility functions for date/time and currency formatting.

- date_time_format: Intl.DateTimeFormat-style formatting of a date-like value.
- parse_float: lenient leading-number parsing (NaN instead of errors).
- currency_format: locale-aware currency display backed by Babel.
"""

import re
import math
from typing import Any, Mapping, Optional, Union
from decimal import Decimal, ROUND_HALF_UP, localcontext
from babel import Locale
from babel.numbers import format_currency, get_currency_precision
from .dates import DEFAULT_LOCALE, DateLike, to_datetime
from .intl import LocaleLike, format_datetime_intl, resolve_locale

DEFAULT_CURRENCY = 'EUR'
CURRENCY_DISPLAYS = ('symbol', 'narrowSymbol', 'code', 'name')

NumberLike = Union[float, int, str, Decimal]

_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NUMERAL = re.compile(r"\d(?:[\d.,'\u00a0\u202f\u2019 ]*\d)?")
_CURRENCY_CODE = re.compile(r"[A-Za-z]{3}")


def date_time_format(
    date: DateLike = None,
    locale: LocaleLike = DEFAULT_LOCALE,
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Format a date according to locale conventions and Intl-style options.

    Args:
        date: Date to format (default: now)
        locale: Locale identifier, e.g. 'it-IT' or 'en_GB'
        options: Intl.DateTimeFormat options, e.g. {'month': 'long', 'year': 'numeric'}

    Returns:
        Formatted date string, e.g. '3/1/2024' for en with no options

    Raises:
        ValueError: Unparseable date, malformed locale or bad option value
    """
    return format_datetime_intl(to_datetime(date), locale, options)


def parse_float(value: Any) -> float:
    """
    Parse the leading floating point literal of a value.

    Numbers are returned as floats. Anything else is read through its
    string form, skipping leading whitespace and ignoring trailing text:
    '19.9 EUR' -> 19.9, 'abc' -> nan, True -> nan.
    """
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return float(value)
    match = _FLOAT_PREFIX.match(str(value).lstrip())
    if not match:
        return math.nan
    return float(match.group(0).replace("Infinity", "inf"))


def _currency_code(currency: str) -> str:
    if not isinstance(currency, str) or not _CURRENCY_CODE.fullmatch(currency):
        raise ValueError(f"Invalid currency code : {currency}")
    return currency.upper()


def round_amount(value: float, code: str) -> Decimal:
    """
    Round to the currency's minor unit, halves away from zero.

    The result keeps its trailing zeros (Decimal('1.00')), which is what
    plural rules look at when naming the currency.

    Example:
      round_amount(0.125, "USD") -> Decimal('0.13')
      round_amount(2.5, "JPY")   -> Decimal('3')
    """
    amount = Decimal(repr(value))
    digits = get_currency_precision(code)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + digits + 2)
        ctx.rounding = ROUND_HALF_UP
        return amount.quantize(Decimal(1).scaleb(-digits))


def _format(value: float, code: str, locale: Locale, currency_display: str) -> str:
    amount = round_amount(value, code)
    with localcontext() as ctx:
        ctx.rounding = ROUND_HALF_UP
        if currency_display == 'name':
            return format_currency(amount, code, locale=locale, format_type='name')
        if currency_display == 'code':
            pattern = locale.currency_formats['standard'].pattern.replace('¤', '¤¤')
            text = format_currency(amount, code, format=pattern, locale=locale)
            # Keep the ISO code apart from the digits
            text = re.sub(rf"{code}(?=[\d-])", f"{code}\u00a0", text)
            return re.sub(rf"(?<=\d){code}", f"\u00a0{code}", text)
        # Babel has no narrow symbols, the standard symbol is used for both
        return format_currency(amount, code, locale=locale)


def currency_format(
    number: NumberLike,
    locale: LocaleLike = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
    currency_display: str = 'symbol',
) -> str:
    """
    Format a number as a currency amount.

    The number goes through parse_float first, so numeric strings are
    accepted and garbage becomes NaN rather than an error. NaN and
    infinities keep the locale's currency layout: '€NaN', '-€∞'.

    Args:
        number: Amount to format
        locale: Locale identifier
        currency: ISO 4217 currency code
        currency_display: 'symbol', 'narrowSymbol', 'code' or 'name'

    Returns:
        Formatted string, e.g. '$19.90' for 19.9 USD in en

    Raises:
        ValueError: Malformed currency code or unknown display mode
    """
    if currency_display not in CURRENCY_DISPLAYS:
        raise ValueError(f"Value {currency_display} out of range for option currencyDisplay")
    code = _currency_code(currency)
    resolved = resolve_locale(locale)
    value = parse_float(number)

    if math.isfinite(value):
        return _format(value, code, resolved, currency_display)

    # Render a placeholder amount with the right sign, then swap the numeral
    placeholder = _format(-1.0 if value < 0 else 0.0, code, resolved, currency_display)
    symbol = '∞' if math.isinf(value) else 'NaN'
    return _NUMERAL.sub(symbol, placeholder, count=1)
