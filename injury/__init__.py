"""Injury subsystem package.

Public API
----------
- injury(health_rank, *, rng): draw an injury type and games missed
"""

from .service import injury

__all__ = ["injury"]
