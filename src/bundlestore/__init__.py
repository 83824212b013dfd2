"""bundlestore — Domain to TrustBundle association store."""

__version__ = "0.1.0"
