"""Kernel time – clock abstraction."""
from todo_bridge.kernel.time.clock import FROZEN_AT, Clock, FrozenClock, SystemClock, utc_now

__all__ = ["FROZEN_AT", "Clock", "FrozenClock", "SystemClock", "utc_now"]
