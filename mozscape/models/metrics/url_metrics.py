from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def _num(value: float) -> str:
    return f"{value:g}"


class URLMetrics(BaseModel):
    """Metrics returned by the service for one URL.

    The service answers with short keys (``ut``, ``uu``, ...) and only
    includes the columns that were requested, so every field defaults to its
    zero value; an explicit ``null`` counts as absent.  Types are checked
    strictly (``"200"`` is not an HTTP status code, ``12.0`` is not a link
    count).  No consistency between fields is assumed.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", strict=True)

    # The title of the page, if available
    title: str = Field("", alias="ut")

    # The canonical form of the URL
    canonical_url: str = Field("", alias="uu")

    # External equity links, and all links (equity or not, internal or external)
    external_equity_links: int = Field(0, alias="ueid")
    links: int = Field(0, alias="uid")

    # MozRank of the URL and of its subdomain: normalized 10-point score and raw score
    mozrank_url_normalized: float = Field(0.0, alias="umrp")
    mozrank_url_raw: float = Field(0.0, alias="umrr")
    mozrank_subdomain_normalized: float = Field(0.0, alias="fmrp")
    mozrank_subdomain_raw: float = Field(0.0, alias="fmrr")

    # HTTP status code recorded by the crawler, if available
    http_status_code: int = Field(0, alias="us")

    # 100-point scores for the page and its domain ranking well in search results
    page_authority: float = Field(0.0, alias="upa")
    domain_authority: float = Field(0.0, alias="pda")

    # Last crawl time, Unix epoch seconds
    time_last_crawled: int = Field(0, alias="ulc")

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_absent(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    def __str__(self) -> str:
        return (
            f"URL: {self.canonical_url}, "
            f"PA: {_num(self.page_authority)}, "
            f"DA: {_num(self.domain_authority)}, "
            f"MRU: {_num(self.mozrank_url_normalized)}, "
            f"MRS: {_num(self.mozrank_subdomain_normalized)}"
        )
