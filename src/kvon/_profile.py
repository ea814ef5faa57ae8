"""
Opt-in hot-path profiling for the tokenizer, parser and encoder.

Set ``KVON_PROFILE`` in the environment before importing kvon to collect
per-function call counts and timings. Otherwise (and always under
``python -O``) every hook below is a no-op.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "KVON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one profiled section."""

    section: str
    call_count: int = 0
    total_time_ns: int = 0
    max_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.max_time_ns = max(self.max_time_ns, duration_ns)
        self.chars_processed += chars

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


def format_hot_path_stats(stats: dict[str, HotPathStats]) -> str:
    """Renders collected stats as a table, slowest section first."""
    rows = sorted(stats.values(), key=lambda s: s.total_time_ns, reverse=True)
    lines = [f"{'section':<24}{'calls':>10}{'total ms':>12}{'mean us':>12}"]
    for row in rows:
        lines.append(
            f"{row.section:<24}{row.call_count:>10}"
            f"{row.total_time_ns / 1e6:>12.3f}{row.mean_time_ns / 1e3:>12.3f}"
        )
    return "\n".join(lines)


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Times the enclosed block under ``section``."""

        def __init__(self, section: str, chars: int = 0) -> None:
            self.section = section
            self.chars = chars
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.get(self.section)
            if stats is None:
                stats = _hot_path_stats[self.section] = HotPathStats(
                    self.section
                )
            stats.record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the collected statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        _hot_path_stats.clear()

else:
    # Zero-cost when profiling is off
    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, section: str, chars: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass
