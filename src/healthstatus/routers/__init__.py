# Router modules are exported here for easier access.

from . import control, health

__all__ = ["control", "health"]
