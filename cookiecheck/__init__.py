"""cookie-check - Audit Set-Cookie headers for security issues."""

__version__ = "1.0.0"
