from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator


class TavilyRequest(BaseModel):
    """Base for request bodies.

    Unknown keyword fields are kept and sent as-is; Tavily is the only validator of
    parameter values.
    """

    model_config = ConfigDict(extra="allow")

    def to_json_bytes(self) -> bytes:
        # Only explicitly set fields go on the wire.
        return self.model_dump_json(exclude_none=True).encode("utf-8")


class TavilySearchRequest(TavilyRequest):
    query: str = Field(description="The search query to execute with Tavily.")
    topic: str | None = Field(
        default=None,
        description=(
            "Search category: 'general' (default) or 'news'. 'news' is useful for real-time updates "
            "about politics, sports and major current events."
        ),
    )
    search_depth: str | None = Field(
        default=None,
        description="'basic' (default) for generic snippets or 'advanced' for the most relevant sources.",
    )
    chunks_per_source: int | None = Field(
        default=None,
        description="Content chunks per source, 1-3 (default 3). Only used with search_depth='advanced'.",
    )
    max_results: int | None = Field(default=None, description="Maximum number of results, 0-20 (default 5).")
    time_range: str | None = Field(
        default=None, description="Time range back from today: 'day', 'week', 'month' or 'year'."
    )
    days: int | None = Field(
        default=None, description="Number of days back to include (default 7). Only used with topic='news'."
    )
    include_answer: bool | str | None = Field(
        default=None,
        description="Include an LLM-generated answer. 'basic' is quick, 'advanced' is more detailed.",
    )
    include_raw_content: bool | None = Field(
        default=None, description="Include the cleaned and parsed HTML content of each result."
    )
    include_images: bool | None = Field(default=None, description="Also run an image search.")
    include_image_descriptions: bool | None = Field(
        default=None, description="With include_images, add a descriptive text for each image."
    )
    include_domains: list[str] | None = Field(default=None, description="Domains to specifically include.")
    exclude_domains: list[str] | None = Field(default=None, description="Domains to specifically exclude.")


class TavilyResponse(BaseModel):
    """Base for decoded payloads.

    A JSON `null` takes the field default, the same as a missing key. Values of the
    wrong type still fail validation.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class TavilySearchResult(TavilyResponse):
    title: str = ""
    url: str = ""
    content: str = ""
    score: float = 0.0
    raw_content: str | None = None


class TavilyImage(TavilyResponse):
    url: str = ""
    description: str = ""


_URL_LIST = TypeAdapter(list[str])
_IMAGE_LIST = TypeAdapter(list[TavilyImage])


def parse_images(raw: Any) -> list[TavilyImage]:
    """
    Decode the search response `images` field.

    Tavily sends either plain URL strings (`include_image_descriptions=false`) or
    `{"url", "description"}` objects. Both normalize to `TavilyImage`.
    """
    if raw is None:
        return []
    try:
        return [TavilyImage(url=url) for url in _URL_LIST.validate_python(raw)]
    except ValidationError:
        pass
    try:
        return _IMAGE_LIST.validate_python(raw)
    except ValidationError as exc:
        raise ValueError("images: invalid format") from exc


class TavilySearchResponse(TavilyResponse):
    query: str = ""
    answer: str | None = None
    follow_up_questions: list[str] | None = None
    images: list[TavilyImage] = Field(default_factory=list)
    results: list[TavilySearchResult] = Field(default_factory=list)
    response_time: float = 0.0
    request_id: str | None = None

    @field_validator("images", mode="before")
    @classmethod
    def _decode_images(cls, value: Any) -> list[TavilyImage]:
        return parse_images(value)


class TavilyExtractRequest(TavilyRequest):
    urls: list[str] = Field(description="The URLs to extract content from.")
    include_images: bool | None = Field(
        default=None, description="Include a list of images extracted from the URLs."
    )
    extract_depth: str | None = Field(
        default=None,
        description=(
            "'basic' (default) or 'advanced'. Advanced extraction retrieves tables and embedded content "
            "with a higher success rate but more latency."
        ),
    )


class TavilyExtractResult(TavilyResponse):
    url: str = ""
    raw_content: str | None = None
    images: list[str] = Field(default_factory=list)


class TavilyExtractFailedResult(TavilyResponse):
    url: str = ""
    error: str = ""


class TavilyExtractResponse(TavilyResponse):
    results: list[TavilyExtractResult] = Field(default_factory=list)
    failed_results: list[TavilyExtractFailedResult] = Field(default_factory=list)
    response_time: float = 0.0
    request_id: str | None = None


class _SiteRequest(TavilyRequest):
    """Fields shared by `/crawl` and `/map`."""

    url: str = Field(description="The root URL to begin from.")
    max_depth: int | None = Field(default=None, description="How far from the root URL to explore (default 1).")
    max_breadth: int | None = Field(default=None, description="Links to follow per page level (default 20).")
    limit: int | None = Field(default=None, description="Total number of links to process before stopping (default 50).")
    instructions: str | None = Field(default=None, description="Natural language instructions for the crawler.")
    select_paths: list[str] | None = Field(
        default=None, description="Regex patterns; only URLs with matching paths are kept (e.g. '/docs/.*')."
    )
    select_domains: list[str] | None = Field(
        default=None, description="Regex patterns; only matching domains or subdomains are kept."
    )
    exclude_paths: list[str] | None = Field(default=None, description="Regex patterns for paths to exclude.")
    exclude_domains: list[str] | None = Field(default=None, description="Regex patterns for domains to exclude.")
    allow_external: bool | None = Field(default=None, description="Whether to return links to external domains.")
    categories: list[str] | None = Field(
        default=None, description="Predefined categories, e.g. 'Documentation', 'Blog', 'Careers'."
    )


class TavilyCrawlRequest(_SiteRequest):
    include_images: bool | None = Field(default=None, description="Include images found on crawled pages.")
    extract_depth: str | None = Field(default=None, description="'basic' (default) or 'advanced'.")


class TavilyCrawlResult(TavilyResponse):
    url: str = ""
    raw_content: str | None = None
    images: list[str] = Field(default_factory=list)


class TavilyCrawlResponse(TavilyResponse):
    base_url: str = ""
    results: list[TavilyCrawlResult] = Field(default_factory=list)
    response_time: float = 0.0
    request_id: str | None = None


class TavilyMapRequest(_SiteRequest):
    pass


class TavilyMapResponse(TavilyResponse):
    base_url: str = ""
    results: list[str] = Field(default_factory=list)
    response_time: float = 0.0
    request_id: str | None = None
