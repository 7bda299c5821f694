"""
Utility functions package.

Exposes the list, date, currency and download helpers.
"""

from .lists import get_unique_list_by
from .formatters import date_time_format, currency_format, parse_float
from .dates import subtract_months, sub_date, last_day_of_month, to_sql_date, to_datetime, parse_datetime
from .downloads import download_file

__all__ = [
    'get_unique_list_by',
    'date_time_format',
    'currency_format',
    'parse_float',
    'subtract_months',
    'sub_date',
    'last_day_of_month',
    'to_sql_date',
    'to_datetime',
    'parse_datetime',
    'download_file',
]
