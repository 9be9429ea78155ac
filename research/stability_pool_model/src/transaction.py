"""All-or-nothing execution across collaborators"""
import functools
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from .interfaces import Snapshottable

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)

def synchronized(method: F) -> F:
    """Run the method under the owner's shared state lock.

    Every collaborator built on one TokenBank shares the bank's lock, so a
    liquidation holding it is never observed or interleaved half way.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)
    return wrapper

@contextmanager
def atomic(*participants: Snapshottable) -> Iterator[None]:
    """Snapshot every participant, restore all of them if the block raises.

    Interrupts are rolled back too. The exception is re-raised unchanged so
    callers see the original failure.
    """
    snapshots = [participant.snapshot() for participant in participants]
    try:
        yield
    except BaseException as e:
        for participant, snapshot in zip(participants, snapshots):
            participant.restore(snapshot)
        logger.warning("Rolled back %d participants after %s: %s",
                       len(participants), type(e).__name__, e)
        raise
