"""Runtime type validation of function arguments."""

import inspect
from decorator import decorate

from .validators import get_validator


def _annotations(f):
    sig = inspect.signature(f)
    hints = {
        n: p.annotation
        for n, p in sig.parameters.items()
        if p.annotation is not p.empty
    }
    if sig.return_annotation is not sig.empty:
        hints["return"] = sig.return_annotation
    return hints


def validate_args(f):
    """Check annotated arguments and return value, raising TypeError on mismatch."""
    f._signature = inspect.signature(f)
    f._validators = {n: get_validator(v) for n, v in _annotations(f).items()}

    def validate_f(f, *args, **kwargs):
        bound = f._signature.bind(*args, **kwargs)
        bound.apply_defaults()

        for n, val in bound.arguments.items():
            validator = f._validators.get(n, None)
            if validator:
                try:
                    validator(val)
                except Exception as vexec:
                    raise TypeError(f"Invalid argument: {n}") from vexec

        retval = f(*args, **kwargs)

        validator = f._validators.get("return", None)
        if validator:
            try:
                validator(retval)
            except Exception as vexec:
                raise TypeError("Invalid return value") from vexec

        return retval

    return decorate(f, validate_f)
