"""Live terminal board for CI build webhooks."""

__version__ = "0.1.0"
