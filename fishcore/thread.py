"""Worker threads that sleep until given a job, and choosing the best search result."""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from fishcore.types import VALUE_INFINITE, VALUE_NONE, Move, is_loss, is_win

Job = Callable[[], object]


class WorkerThread:
    """A thread parked in an idle loop until a job is handed to it.

    Jobs run one at a time, in the order given. An exception raised by a job
    is re-raised by the next call to wait_for_search_finished().
    """

    def __init__(self, thread_id: int) -> None:
        self._id = thread_id
        self._cv = threading.Condition()
        self._searching = True  # Set before the thread starts
        self._exit = False
        self._closed = False
        self._job: Optional[Job] = None
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(
            target=self._idle_loop, name=f"worker-{thread_id}", daemon=True
        )
        self._thread.start()
        self.wait_for_search_finished()

    @property
    def id(self) -> int:
        return self._id

    def _idle_loop(self) -> None:
        while True:
            with self._cv:
                self._searching = False
                self._cv.notify_all()  # Wake anyone waiting for the job to finish
                self._cv.wait_for(lambda: self._searching)
                if self._exit:
                    return
                job, self._job = self._job, None

            if job is not None:
                try:
                    job()
                except BaseException as error:  # handed back to the waiting caller
                    with self._cv:
                        self._error = error

    def run_custom_job(self, job: Job) -> None:
        """Hand a job to the thread once it is idle; returns without waiting for it."""
        with self._cv:
            if self._closed:
                raise RuntimeError(f"worker {self._id} is closed")
            self._cv.wait_for(lambda: not self._searching)
            self._job = job
            self._searching = True
            self._cv.notify_all()

    def wait_for_search_finished(self) -> None:
        """Block until the thread is idle again."""
        with self._cv:
            self._cv.wait_for(lambda: not self._searching)
            error, self._error = self._error, None
        if error is not None:
            raise error

    def close(self) -> None:
        """Wait for the current job, then stop the thread."""
        if self._closed:
            return
        with self._cv:
            self._cv.wait_for(lambda: not self._searching)
            self._closed = True
            self._exit = True
            self._searching = True
            self._cv.notify_all()
        self._thread.join()


class ThreadPool:
    """A fixed set of worker threads addressed by index."""

    def __init__(self, num_threads: int = 1) -> None:
        if num_threads < 0:
            raise ValueError("thread count cannot be negative")
        self._threads: List[WorkerThread] = [WorkerThread(i) for i in range(num_threads)]

    def _thread(self, thread_id: int) -> WorkerThread:
        if not 0 <= thread_id < len(self._threads):
            raise IndexError(f"no thread {thread_id}")
        return self._threads[thread_id]

    def run_on_thread(self, thread_id: int, job: Job) -> None:
        self._thread(thread_id).run_custom_job(job)

    def wait_on_thread(self, thread_id: int) -> None:
        self._thread(thread_id).wait_for_search_finished()

    def num_threads(self) -> int:
        return len(self._threads)

    def __len__(self) -> int:
        return len(self._threads)

    def __iter__(self):
        return iter(self._threads)

    def run_on_all(self, job: Callable[[int], object]) -> None:
        """Start job(thread_id) on every thread."""
        for worker in self._threads:
            worker.run_custom_job(lambda tid=worker.id: job(tid))

    def wait_for_all(self) -> None:
        errors = []
        for worker in self._threads:
            try:
                worker.wait_for_search_finished()
            except BaseException as error:
                errors.append(error)
        if errors:
            raise errors[0]

    def close(self) -> None:
        """Stop every thread, after the jobs in progress finish."""
        for worker in self._threads:
            worker.close()
        self._threads = []

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


@dataclass
class ThreadResult:
    """What one thread's search left at its first root move."""

    score: int
    completed_depth: int
    pv: List[Move] = field(default_factory=list)


def select_best_result(results: Sequence[ThreadResult]) -> ThreadResult:
    """Pick the result to play from, voting by score and depth.

    Proven wins prefer the shortest mate, proven losses the longest; otherwise
    the move with most votes wins, avoiding results with truncated lines.
    """
    if not results:
        raise ValueError("no results to choose from")

    min_score = min([VALUE_NONE] + [r.score for r in results])

    def voting_value(result: ThreadResult) -> int:
        return (result.score - min_score + 14) * int(result.completed_depth)

    votes: Dict[Move, int] = defaultdict(int)
    for result in results:
        votes[result.pv[0]] += voting_value(result)

    best = results[0]
    for result in results:
        best_score = best.score
        new_score = result.score

        best_vote = votes[best.pv[0]]
        new_vote = votes[result.pv[0]]

        best_in_win = is_win(best_score)
        new_in_win = is_win(new_score)
        best_in_loss = best_score != -VALUE_INFINITE and is_loss(best_score)
        new_in_loss = new_score != -VALUE_INFINITE and is_loss(new_score)

        better_voting_value = voting_value(result) * int(len(result.pv) > 2) > voting_value(
            best
        ) * int(len(best.pv) > 2)

        if best_in_win:
            if new_score > best_score:
                best = result
        elif best_in_loss:
            if new_in_loss and new_score < best_score:
                best = result
        elif (
            new_in_win
            or new_in_loss
            or (
                not is_loss(new_score)
                and (
                    new_vote > best_vote
                    or (new_vote == best_vote and better_voting_value)
                )
            )
        ):
            best = result

    return best


def bound_thread_count_by_numa_node(bound_nodes: Sequence[int]) -> List[int]:
    """How many threads are bound to each NUMA node, indexed by node."""
    if not bound_nodes:
        return []
    counts = [0] * (max(bound_nodes) + 1)
    for node in bound_nodes:
        counts[node] += 1
    return counts