"""Column bits understood by the url-metrics endpoint.

The values are fixed by the service; see
https://moz.com/help/guides/moz-api/mozscape/api-reference/url-metrics
"""

from __future__ import annotations

from enum import IntFlag


class Column(IntFlag):
    TITLE = 1
    CANONICAL_URL = 4
    EXTERNAL_EQUITY_LINKS = 32
    LINKS = 2048
    MOZRANK_URL = 16384
    MOZRANK_SUBDOMAIN = 32768
    HTTP_STATUS_CODE = 536870912
    PAGE_AUTHORITY = 34359738368
    DOMAIN_AUTHORITY = 68719476736
    TIME_LAST_CRAWLED = 144115188075855872


#: Every column this client knows how to decode.
DEFAULT_COLUMNS: Column = (
    Column.TITLE
    | Column.CANONICAL_URL
    | Column.EXTERNAL_EQUITY_LINKS
    | Column.LINKS
    | Column.MOZRANK_URL
    | Column.MOZRANK_SUBDOMAIN
    | Column.HTTP_STATUS_CODE
    | Column.PAGE_AUTHORITY
    | Column.DOMAIN_AUTHORITY
    | Column.TIME_LAST_CRAWLED
)
