"""
Exceptions raised by the policer's input collaborators.
The retention core itself never raises.
"""


class PolicerError(Exception):
    """Base class for every failure that aborts a policing run"""


class PolicyParseError(PolicerError):
    """The retention policy description could not be understood"""


class TimestampParseError(PolicerError):
    """A timestamp embedded in an entry name could not be parsed"""


class InputDecodeError(PolicerError):
    """The list of entries read from stdin is not a JSON array of strings"""


class ConfigError(PolicerError):
    """The configuration file is missing or malformed"""
