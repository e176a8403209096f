"""Annotation-driven value converters, used by the attrs conversion mixin."""

from functools import singledispatch

import toolz

_converters = []


@singledispatch
def get_converter(type_annotation):
    for pred, conv in _converters:
        if pred(type_annotation):
            return conv(type_annotation)

    return constructor_convert(type_annotation)


@toolz.curry
def constructor_convert(type_annotation, value):
    if isinstance(value, type_annotation):
        return value
    else:
        return type_annotation(value)


def register_converter(type_predicate, converter):
    _converters.append((type_predicate, converter))
