"""Mock backend for frontend development.

Static lookups, artificial latency, simulated failures, and a stats
endpoint whose responses are batched and released with jittered timing.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
