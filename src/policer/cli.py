#!/usr/bin/env python3
"""
Backup Policer
Reads a JSON array of backup paths on stdin and prints the ones the
retention policy allows deleting. Nothing is deleted.

Example:
    ls -d /srv/backups/* | jq -R . | jq -s . | backup-policer -p '[{"days": 1}, {"weeks": 1}]'
"""

import sys
import json
import logging
import argparse
from datetime import datetime, timezone

from src.common.config import ConfigManager
from src.common.utils import setup_logging, teardown_logging, get_logger
from src.policer import __version__
from src.policer.errors import PolicerError, InputDecodeError, ConfigError
from src.policer.naming import parse_timestamp, select_for_deletion
from src.policer.policy import parse_policy

logger = get_logger(__name__)


def read_paths(stream):
    """Decodes the JSON array of strings given on stdin"""
    try:
        paths = json.loads(stream.read())
    except UnicodeDecodeError as e:
        raise InputDecodeError(f"error decoding input: not valid UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise InputDecodeError(f"error decoding input: invalid JSON ({e})") from e

    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        raise InputDecodeError("error decoding input: expected a JSON array of strings")
    return paths


def resolve_log_level(args, cm):
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO

    name = str(cm.get('log_level', 'WARNING')).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigError(f"unknown log_level '{name}'")
    return level


def build_parser():
    parser = argparse.ArgumentParser(
        prog='backup-policer',
        description="Select backups to delete under a tiered retention policy")
    parser.add_argument('-p', '--policy',
                        help='Policy as a JSON array of durations (e.g. \'[{"days": 4}, {"hours": 2}]\')')
    parser.add_argument('-c', '--config', help='JSON configuration file')
    parser.add_argument('--now', help='Reference time as RFC 3339 date-time (default: current UTC time)')
    parser.add_argument('--log-file', help='Also write log messages to this file')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='More logging (-vv for debug)')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def run(args, cm, stdin, stdout):
    handlers = setup_logging(args.log_file or cm.get('log_file'), resolve_log_level(args, cm))
    try:
        police_stdin(args, cm, stdin, stdout)
    finally:
        teardown_logging(handlers)


def police_stdin(args, cm, stdin, stdout):
    policy_source = args.policy if args.policy is not None else cm.get('policy')
    policy = parse_policy(policy_source)
    now = parse_timestamp(args.now) if args.now else datetime.now(timezone.utc)
    logger.info(f"Reference time: {now.isoformat()}")

    paths = read_paths(stdin)
    selected = select_for_deletion(now, policy, paths)

    stdout.write(json.dumps(selected, separators=(',', ':')) + '\n')
    stdout.flush()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.policy is None and not args.config:
        parser.error("a policy is required: pass --policy or a --config file defining 'policy'")

    try:
        cm = ConfigManager(args.config)
        if args.policy is None and cm.get('policy') is None:
            parser.error(f"config file {args.config} does not define 'policy'; pass --policy")
        run(args, cm, sys.stdin, sys.stdout)
    except PolicerError as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)

    return 0


if __name__ == '__main__':
    sys.exit(main())
