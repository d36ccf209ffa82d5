"""Login + image-integrity smoke check for CI."""

__version__ = "1.0.0"
