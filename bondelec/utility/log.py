"""Logger helpers shared by the scoring classes."""

import attr
import contextlib
import logging
import time


def logger_for_class(cls: type) -> logging.Logger:
    """Get {module}.{name} named logger for class."""
    return logging.getLogger(f"{cls.__module__}.{cls.__name__}")


def classlogger_for(instance: object) -> logging.Logger:
    """Get {module}.{class name} named logger for object."""
    return logger_for_class(type(instance))


# attrs field giving each instance its class-named logger, excluded from
# init, repr and equality.
ClassLogger = attr.ib(
    default=attr.Factory(classlogger_for, takes_self=True),
    repr=False,
    init=False,
    eq=False,
)


@contextlib.contextmanager
def log_elapsed(logger: logging.Logger, label: str, level=logging.DEBUG):
    """Log wall time spent in the block as "<label>: <seconds>s"."""
    start = time.perf_counter()
    try:
        yield
    finally:
        if logger.isEnabledFor(level):
            logger.log(level, "%s: %.6fs", label, time.perf_counter() - start)
