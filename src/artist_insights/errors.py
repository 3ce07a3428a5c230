from __future__ import annotations


class DashboardError(Exception):
    """Base class for errors raised by the dashboard backend."""


class ConfigurationError(DashboardError):
    """Required configuration (client credentials, tokens) is missing."""


class UpstreamError(DashboardError):
    def __init__(self, platform: str, status: int | None, message: str) -> None:
        super().__init__(message)
        self.platform = platform
        self.status = status


class TokenExpiredError(UpstreamError):
    def __init__(self, platform: str = "spotify") -> None:
        super().__init__(platform, 401, "Token expired. Please re-authenticate.")


class NotAuthenticatedError(DashboardError):
    def __init__(self, platform: str) -> None:
        super().__init__(f"No {platform} access token available")
        self.platform = platform


class TokenExchangeError(DashboardError):
    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
