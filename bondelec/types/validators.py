"""Annotation-driven value validators.

``get_validator(annotation)`` returns a one-argument callable raising
``TypeError`` for values not matching the annotation. Plain classes are
checked with ``isinstance``; other annotation kinds, eg. array specs,
register a predicate and validator factory via ``register_validator``.
"""

from functools import singledispatch

import toolz

_validators = []


@singledispatch
def get_validator(type_annotation):
    for pred, val in _validators:
        if pred(type_annotation):
            return val(type_annotation)
    else:
        return validate_isinstance(type_annotation)


@toolz.curry
def validate_isinstance(type_annotation, value):
    if not isinstance(value, type_annotation):
        raise TypeError(f"expected {type_annotation}, received {type(value)!r}")


def register_validator(type_predicate, validator):
    _validators.append((type_predicate, validator))
