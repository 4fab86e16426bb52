"""Herald - deferred, validating webhook message requests."""

__version__ = "0.1.0"
