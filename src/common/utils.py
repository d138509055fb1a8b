import logging
import sys

from src.policer.errors import ConfigError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_file=None, level=logging.WARNING):
    """
    Configures logging for the application. stdout is kept free for results.
    If the root logger is already configured, only the log file is added.
    Returns the handlers attached, for teardown_logging().
    """
    file_handler = None
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            raise ConfigError(f"cannot open log file {log_file}: {e}") from e

    root = logging.getLogger()
    if root.handlers:
        if file_handler is None:
            return []
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
        return [file_handler]

    handlers = [logging.StreamHandler(sys.stderr)]
    if file_handler is not None:
        handlers.append(file_handler)
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    return handlers


def teardown_logging(handlers):
    """Detaches and closes handlers returned by setup_logging()"""
    root = logging.getLogger()
    for handler in handlers:
        root.removeHandler(handler)
        handler.close()


def get_logger(name):
    """Returns a logger instance with the given name"""
    return logging.getLogger(name)
