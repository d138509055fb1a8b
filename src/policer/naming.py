"""
Timestamps embedded in backup names.
A backup is identified by a path whose last segment starts with a date-time,
e.g. '/srv/backups/2022-10-28T12:00:00Z_home.tar.gz'.
"""

import logging
from datetime import datetime

from .core import police
from .errors import TimestampParseError

logger = logging.getLogger(__name__)


def parse_timestamp(text):
    """Parses an RFC 3339 date-time. The UTC offset is mandatory ('Z' is accepted)."""
    candidate = text
    if candidate[-1:] in ('Z', 'z'):
        candidate = candidate[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as e:
        raise TimestampParseError(f"error parsing date: {text!r} ({e})") from e

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise TimestampParseError(f"error parsing date: {text!r} has no UTC offset")
    return parsed


def extract_timestamp(path):
    """Returns the timestamp at the start of the path's file part, before the first '_'"""
    file_part = path.split('/')[-1]
    date_part = file_part.split('_')[0]
    return parse_timestamp(date_part)


def build_ledger(paths):
    """Pairs each path with its timestamp. Stops at the first unparseable path."""
    ledger = []
    for path in paths:
        try:
            ledger.append((extract_timestamp(path), path))
        except TimestampParseError as e:
            raise TimestampParseError(f"{path}: {e}") from e
    return ledger


def select_for_deletion(now, policy, paths):
    """Returns the paths that may be deleted, in the order the policer reports them"""
    ledger = build_ledger(paths)
    logger.info(f"Policing {len(ledger)} entries against {len(policy)} thresholds")
    return [path for _, path in police(now, policy, ledger)]
