"""Serialising writers that change stock on hand.

Two guards keep concurrent check-and-decrement sequences from overselling:

* ``stock_lock`` is a process-wide lock held around a whole stock-changing
  command, commit included. It is what protects the in-memory provider,
  which has no transactions of its own to lean on.
* ``ProductRepository.get_for_update`` takes a row lock
  (``SELECT ... FOR UPDATE``) when the products live in a SQL database, so
  writers in other processes queue behind the open transaction instead of
  reading the same quantity.

Every service that withdraws or restores stock enters ``stock_lock`` and
reads its products through ``get_for_update``.
"""

import threading
from contextlib import contextmanager

_lock = threading.RLock()


@contextmanager
def stock_lock():
    with _lock:
        yield
