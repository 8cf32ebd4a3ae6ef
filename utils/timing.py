"""Per-stage wall-clock timing for the render pipeline."""

import time


class Timer:
    """Collects elapsed milliseconds for named pipeline stages."""

    def __init__(self):
        self.stage_times_ms = {}

    def measure(self, stage: str, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000.0
        self.stage_times_ms[stage] = self.stage_times_ms.get(stage, 0.0) + elapsed
        return result

    def elapsed(self, *stages: str) -> float:
        """Summed time of the given stages (all stages when none are named)."""
        if not stages:
            return sum(self.stage_times_ms.values())
        return sum(self.stage_times_ms.get(s, 0.0) for s in stages)
