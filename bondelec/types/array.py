"""Annotations for numpy array arguments and attributes.

An :class:`NDArray` spec names a dtype and a shape, ``None`` marking a free
dimension::

    Coords = NDArray(numpy.float64, (None, 3))

Specs plug into :mod:`bondelec.types.validators` and
:mod:`bondelec.types.converters`, so they can be used as annotations with
``validate_args`` and ``ConvertAttrs``.
"""

import enum
import typing

import attr
import numpy

from .converters import register_converter
from .validators import register_validator


class Casting(enum.Enum):
    """Casting specifications for array types, see ndarray.astype."""

    no = "no"
    equiv = "equiv"
    safe = "safe"
    same_kind = "same_kind"
    unsafe = "unsafe"


@attr.s(frozen=True, slots=True, auto_attribs=True, repr=False)
class NDArray:
    dtype: numpy.dtype = attr.ib(converter=numpy.dtype)
    shape: typing.Tuple[typing.Optional[int], ...] = attr.ib(converter=tuple)
    casting: Casting = Casting.safe

    def __repr__(self):
        dims = ", ".join(":" if d is None else str(d) for d in self.shape)
        return f"NDArray[{self.dtype}][{dims}]"

    def validate(self, value):
        if not isinstance(value, numpy.ndarray):
            raise TypeError(f"expected {self!r}, received {type(value)!r}")
        if value.dtype != self.dtype:
            raise TypeError(f"expected {self.dtype!r}, received {value.dtype!r}")
        if value.ndim != len(self.shape):
            raise TypeError(
                f"expected {len(self.shape)} dimensions, received shape {value.shape}"
            )
        for i, (want, got) in enumerate(zip(self.shape, value.shape)):
            if want is not None and want != got:
                raise TypeError(
                    f"expected size {want} in dimension {i}, received shape "
                    f"{value.shape}"
                )

        return True

    def convert(self, value):
        if not isinstance(value, numpy.ndarray):
            value = numpy.asarray(value)
        if value.size == 0 and value.ndim < len(self.shape):
            # empty sequences carry neither shape nor dtype, eg. a bond-free system
            value = numpy.zeros(
                tuple(0 if d is None else d for d in self.shape), dtype=self.dtype
            )
        if value.dtype != self.dtype:
            value = value.astype(self.dtype, casting=self.casting.value)

        self.validate(value)

        return value


register_validator(lambda t: isinstance(t, NDArray), lambda t: t.validate)
register_converter(lambda t: isinstance(t, NDArray), lambda t: t.convert)
