"""
Resolver configuration - YAML constraint bundles for context resolution.
"""

from chuk_kpdve.config.loader import ConfigLoader

__all__ = ["ConfigLoader"]
