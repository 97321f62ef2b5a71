"""Top-level package for the surfraw-conf application."""

# Re-export commonly used namespaces for convenience when running as a module.
from . import surfraw, utils  # noqa: F401

__all__ = ["surfraw", "utils"]
