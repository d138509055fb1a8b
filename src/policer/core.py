"""
Retention Policer
Tiered Grandfather-Father-Son style selection of backups to delete.

The policy is a list of maximum ages. Sorted ascending, its entries are the
limits of buckets: one bucket below the smallest limit, one between each pair
of adjacent limits and an unbounded one beyond the largest. Backups are
assigned to buckets starting with the nearest past.

- A bucket that is closed by an older backup keeps its OLDEST member.
- The bucket still open once every backup is consumed keeps its NEWEST member.
- At least len(policy) + 1 backups always survive (or all of them, if fewer).
"""

import logging
from datetime import datetime, timedelta
from typing import List, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
Entry = Tuple[datetime, T]


def normalize_policy(policy: Sequence[timedelta]) -> List[timedelta]:
    """Returns the thresholds in ascending order, duplicates kept"""
    return sorted(policy)


def _partition(now, policy, entries):
    """
    Walks entries newest first and closes a bucket each time an entry is
    older than the current threshold. Returns the raw deletion list.
    """
    thresholds = iter(policy)
    threshold = next(thresholds, None)
    bucket = []  # newest first
    to_delete = []

    for entry in reversed(entries):
        if threshold is None:
            # Beyond the largest limit: the far bucket never closes
            bucket.append(entry)
        elif now - entry[0] > threshold:
            if bucket:
                survivor = bucket.pop()
                logger.debug(f"Bucket <= {threshold} closed: keeping {survivor[0]}, "
                             f"dropping {len(bucket)}")
                to_delete.extend(bucket)
                bucket = [entry]
            threshold = next(thresholds, None)
        else:
            bucket.append(entry)

    if bucket:
        logger.debug(f"Open bucket resolved: keeping {bucket[0][0]}, dropping {len(bucket) - 1}")
        to_delete.extend(bucket[1:])

    return to_delete


def _enforce_floor(ledger_size, to_delete, policy_size):
    """
    Rescues entries until more than policy_size survive.
    Entries are rescued from the front of the deletion list, i.e. in the
    order they were condemned (newest entries of the nearest buckets first).
    """
    remaining = list(to_delete)
    while remaining and ledger_size - len(remaining) <= policy_size:
        entry = remaining.pop(0)
        logger.debug(f"Floor of {policy_size + 1} survivors: rescuing {entry[0]}")
    return remaining


def police(now: datetime, policy: Sequence[timedelta], ledger: Sequence[Entry]) -> List[Entry]:
    """
    Returns the entries of ledger that the retention policy allows deleting.

    * now - reference time the ages are measured from
    * policy - maximum ages, in any order
    * ledger - (timestamp, payload) tuples, in any order

    The returned list holds the ledger's own tuples; neither the ledger nor
    the payloads are copied or modified.
    """
    thresholds = normalize_policy(policy)
    entries = sorted(ledger, key=lambda entry: entry[0])

    to_delete = _partition(now, thresholds, entries)
    to_delete = _enforce_floor(len(entries), to_delete, len(thresholds))

    logger.info(f"{len(to_delete)} of {len(entries)} entries selected for deletion")
    return to_delete
