"""Exception hierarchy for the site build."""


class SiteError(Exception):
    """Base exception for all build failures."""


class ConfigError(SiteError):
    """Raised when required configuration (credentials) is missing or invalid."""


class QueryError(SiteError):
    """Raised when a Contentful query fails at the HTTP or GraphQL level."""


class QueryTimeoutError(QueryError, TimeoutError):
    """Raised when a Contentful request exceeds the configured timeout."""

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Contentful request timed out after {timeout_ms}ms")


class RenderError(SiteError):
    """Base exception for page rendering failures."""


class EmptyContentError(RenderError):
    """Raised when a page's minimum content requirement is not met."""


class TemplateMissingError(RenderError):
    """Raised when a required page template (or container element) is missing."""


class BuildError(SiteError):
    """Raised when a build step fails."""

    def __init__(self, step: str, cause: BaseException) -> None:
        self.step = step
        self.cause = cause
        super().__init__(f"Build step '{step}' failed: {cause}")
