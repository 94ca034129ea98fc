"""
Custom application exceptions.
"""


class TickerError(Exception):
    """Base exception for ticker errors."""
    pass


class PayloadError(TickerError):
    """Webhook body could not be decoded as JSON."""
    pass


class ConfigError(TickerError):
    """Resolved configuration is unusable."""
    pass
