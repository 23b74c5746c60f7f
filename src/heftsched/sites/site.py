import threading
import typing as tp

from heftsched.errors import SchedulingError


class Site:
    """Representation of a compute site with a fixed number of
    identical processors.

    Every processor has a pointer to the time when it becomes free.
    Pointers only move forward, idle gaps earlier in the timeline are
    never reused (non-insertion policy).
    """

    def __init__(self, name: str, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"Bad capacity {capacity} for site {name}")

        self.name = name
        self.capacity = capacity

        # Time when each processor becomes free. Measures in seconds.
        self.next_free: list[int] = [0] * capacity

        # Committed occupations in order of commits.
        self.intervals: list[tp.Tuple[int, int]] = []

        self._lock = threading.Lock()

    def __str__(self) -> str:
        return (f"<Site "
                f"name = {self.name}, "
                f"capacity = {self.capacity}, "
                f"next_free = {self.next_free}>")

    def __repr__(self) -> str:
        return (f"Site("
                f"name = {self.name}, "
                f"capacity = {self.capacity})")

    def get_available_processors(self) -> int:
        return self.capacity

    def earliest_available(self, ready_time: int) -> int:
        """Return earliest time at or after `ready_time` when some
        processor is idle.

        :param ready_time: time when all input data is on site.
        :return: available time.
        """

        return max(ready_time, min(self.next_free))

    def commit(self, start: int, end: int) -> int:
        """Occupy processor with the minimal next free time from
        `start` till `end`.

        :param start: start time of job.
        :param end: end time of job.
        :return: index of occupied processor.
        """

        if end < start:
            raise SchedulingError(
                f"Job on site {self.name} ends at {end} before start {start}"
            )

        with self._lock:
            processor = min(
                range(self.capacity),
                key=lambda ind: self.next_free[ind],
            )

            if self.next_free[processor] > start:
                raise SchedulingError(
                    f"No processor on site {self.name} is free at {start}. "
                    f"Earliest available at {self.next_free[processor]}"
                )

            self.next_free[processor] = end
            self.intervals.append((start, end))

        return processor
