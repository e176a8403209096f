"""Mixin for attrs-class type conversion."""

from .converters import get_converter


def _typed_init_fields(inst):
    # init=False fields are derived in __attrs_post_init__, after conversion.
    return [a for a in inst.__attrs_attrs__ if a.init and a.type is not None]


class ConvertAttrs:
    """Coerce every init field without its own converter to its annotation."""

    def __attrs_post_init__(self):
        for a in _typed_init_fields(self):
            if not a.converter:
                try:
                    value = get_converter(a.type)(getattr(self, a.name))
                except (TypeError, ValueError) as e:
                    raise TypeError(
                        "Failed to convert attribute '" + a.name + "': " + str(e)
                    ) from e
                object.__setattr__(self, a.name, value)
