"""patch-cascade — compute cascading patch updates for a multi-repo release."""

__version__ = "0.1.0"
