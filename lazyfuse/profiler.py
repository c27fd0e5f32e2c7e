# lazyfuse/profiler.py
#
# Defines the Python-side logic for the profiler, providing a clean
# API and context manager for timing materializations. While a profile is
# active, the executor reports one event per fused pass.

_events = []
_active = False


def is_active() -> bool:
    return _active


def record_event(name: str, duration_ms: float):
    """Called by the executor after each materialization while profiling."""
    if _active:
        _events.append((name, duration_ms))


class profile:
    """
    A context manager for profiling a block of lazyfuse code.

    Example:
        with lazyfuse.profile() as p:
            # Code to profile...
        p.print_report()
    """
    def __init__(self):
        self.events = []

    def __enter__(self):
        global _active
        _events.clear()
        _active = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        global _active
        _active = False
        self.events = list(_events)
        _events.clear()

    @property
    def total_ms(self) -> float:
        return sum(duration for _, duration in self.events)

    def slowest(self, min_ms: float = 0.0) -> list:
        """Events of at least `min_ms`, slowest first."""
        events = [event for event in self.events if event[1] >= min_ms]
        return sorted(events, key=lambda event: event[1], reverse=True)

    def print_report(self, sort: bool = False, min_ms: float = 0.0):
        """
        Prints the captured events. Percentages are always of the total time,
        including events hidden by `min_ms`.

        Args:
            sort: List the slowest materializations first.
            min_ms: Hide events shorter than this many milliseconds.
        """
        print("--- lazyfuse Profiler Report ---")
        if not self.events:
            print("No events captured.")
            return

        total_time = self.total_ms
        if sort:
            events = self.slowest(min_ms)
        else:
            events = [event for event in self.events if event[1] >= min_ms]

        print(f"Total materialization time: {total_time:.4f} ms")
        print("-----------------------------")

        for name, duration in events:
            percentage = (duration / total_time * 100) if total_time > 0 else 0
            print(f"{name:<40} | {duration:>10.4f} ms | ({percentage:5.1f}%)")
        hidden = len(self.events) - len(events)
        if hidden:
            print(f"({hidden} event(s) under {min_ms:g} ms hidden)")
        print("-----------------------------")
