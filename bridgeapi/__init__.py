"""HTTP API for monitoring a cross-chain token bridge: routing, handlers, models, errors and a standard-library server."""

__version__ = "0.1.0"
__all__ = ["__version__"]