"""Rich terminal rendering of batch results."""

from minforge.monitor.renderer import ResultRenderer

__all__ = ["ResultRenderer"]
