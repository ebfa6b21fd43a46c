from __future__ import annotations


class ReceitasError(Exception):
    """Base error. ``message`` is safe to show to API clients."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(ReceitasError):
    status_code = 400


class ConfigurationError(ReceitasError):
    pass


class UpstreamError(ReceitasError):
    status_code = 502

    def __init__(self, message: str, upstream_status: int | None = None, status_code: int | None = None):
        super().__init__(message, status_code=status_code)
        self.upstream_status = upstream_status


class UpstreamBadContentType(UpstreamError):
    pass


class UpstreamTimeout(ReceitasError):
    pass


class UpstreamUnavailable(ReceitasError):
    pass


class TransformError(ReceitasError):
    pass
