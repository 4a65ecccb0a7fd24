from __future__ import annotations


class TavilyError(RuntimeError):
    """Base error for Tavily client failures.

    `operation` is the API operation (search, extract, crawl, map) and `stage` is
    where it failed (config, serialize, request, response, decode).
    """

    def __init__(self, message: str, *, operation: str | None = None, stage: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.stage = stage


class TavilyConfigError(TavilyError):
    pass


class TavilySerializationError(TavilyError):
    pass


class TavilyTransportError(TavilyError):
    pass


class TavilyTimeoutError(TavilyTransportError):
    pass


class TavilyHTTPError(TavilyError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str,
        operation: str | None = None,
        stage: str | None = "response",
    ) -> None:
        super().__init__(message, operation=operation, stage=stage)
        self.status_code = status_code
        # Raw upstream payload, not parsed.
        self.body = body


class TavilyDecodeError(TavilyError):
    pass
