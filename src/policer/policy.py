"""
Retention policy parsing.
A policy is a JSON array of durations, e.g. '[{"days": 4}, {"weeks": 1, "hours": 12}]'.
"""

import json
import logging
from datetime import timedelta

from .errors import PolicyParseError

logger = logging.getLogger(__name__)

DURATION_FIELDS = ('weeks', 'days', 'hours', 'minutes', 'seconds')


def duration_from_mapping(mapping):
    """Sums the optional duration fields of one policy object (missing fields count as 0)"""
    if not isinstance(mapping, dict):
        raise PolicyParseError(f"expected an object, got {json.dumps(mapping)}")

    unknown = sorted(set(mapping) - set(DURATION_FIELDS))
    if unknown:
        logger.warning(f"Ignoring unknown duration fields: {', '.join(unknown)}")

    amounts = {}
    for field in DURATION_FIELDS:
        value = mapping.get(field, 0)
        if value is None:
            value = 0
        # bool is an int subclass, but true/false is not a duration
        if isinstance(value, bool) or not isinstance(value, int):
            raise PolicyParseError(f"field '{field}' must be an integer, got {json.dumps(value)}")
        amounts[field] = value

    try:
        return timedelta(**amounts)
    except OverflowError as e:
        raise PolicyParseError(f"duration {json.dumps(mapping)} is out of range: {e}") from e


def parse_policy(source):
    """
    Parses a policy from its JSON text or from an already decoded list.
    Returns the durations in input order.
    """
    if isinstance(source, (str, bytes)):
        try:
            source = json.loads(source)
        except json.JSONDecodeError as e:
            raise PolicyParseError(f"error parsing policy: invalid JSON ({e})") from e

    if not isinstance(source, list):
        raise PolicyParseError("error parsing policy: expected a JSON array of durations")

    policy = []
    for index, item in enumerate(source):
        try:
            policy.append(duration_from_mapping(item))
        except PolicyParseError as e:
            raise PolicyParseError(f"error parsing policy entry {index}: {e}") from e

    logger.debug(f"Parsed policy: {[str(d) for d in policy]}")
    return policy
