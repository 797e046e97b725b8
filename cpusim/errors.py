"""
Exceptions raised by the scheduling engines and workload loaders.

All of them derive from ``ValueError`` so callers that only know about
bad-input errors keep working.
"""


class SchedulerError(ValueError):
    pass


class InvalidPolicy(SchedulerError):
    """Unknown or unsupported scheduling policy selector."""

    def __init__(self, selector):
        self.selector = selector
        super().__init__(f"Invalid choice! Unknown scheduling policy {selector!r} (use fcfs, rr or srt)")


class InvalidParameter(SchedulerError):
    """A process descriptor or engine parameter violates the input contract."""
