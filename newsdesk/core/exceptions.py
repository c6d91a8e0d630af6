# newsdesk/core/exceptions.py
"""Application errors mapped to HTTP status codes by the handlers in main."""


class NewsError(Exception):
    """Base exception for newsdesk errors"""
    status_code = 500

    def __init__(self, message: str = "Internal server error", context=None):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(NewsError):
    """Bad or missing input"""
    status_code = 400


class NotFoundError(NewsError):
    """Requested resource does not exist"""
    status_code = 404


class UpstreamError(NewsError):
    """AI provider failures"""
    status_code = 502


class DatabaseError(NewsError):
    """Store access failures"""
    status_code = 500
