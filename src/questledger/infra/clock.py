from __future__ import annotations

import time


class SystemClock:
    """Wall-clock time in whole unix seconds."""

    def now(self) -> int:
        return int(time.time())
