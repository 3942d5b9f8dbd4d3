"""Opaque handles over OpenCV's native objects.

Every handle holds exactly one field, ``ptr``, referencing the object it owns.
A handle delivered by an entry point belongs to the receiver; a handle passed
into an entry point is only borrowed for the duration of that call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

import cv2
import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from numpy.typing import DTypeLike, NDArray


class Handle:
    """Base for owning handles. ``release()`` drops the native reference."""

    __slots__ = ("ptr",)

    ptr: Any

    def __init__(self, ptr: Any) -> None:
        self.ptr = ptr

    @property
    def released(self) -> bool:
        return self.ptr is None

    def release(self) -> None:
        """Release the owned native object. Releasing twice is a no-op."""
        self.ptr = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"{type(self).__name__}<{state}>"


# ---------------------------------------------------------------------------
# Image matrices
# ---------------------------------------------------------------------------


class Mat(Handle):
    """Handle owning a single dense image matrix (``numpy.ndarray``)."""

    __slots__ = ()

    ptr: NDArray[Any] | None

    # -- Constructors -------------------------------------------------------

    @classmethod
    def empty(cls) -> Mat:
        """An empty 0x0 matrix, usable as an output placeholder."""
        return cls(np.empty((0, 0), dtype=np.uint8))

    @classmethod
    def from_array(cls, data: NDArray[Any], *, copy: bool = True) -> Mat:
        """Wrap an array. With ``copy`` the handle owns a private C-contiguous copy."""
        array = np.array(data, copy=True, order="C") if copy else np.ascontiguousarray(data)
        return cls(array)

    @classmethod
    def zeros(cls, rows: int, cols: int, channels: int = 1, dtype: DTypeLike = np.uint8) -> Mat:
        return cls(np.zeros(_shape(rows, cols, channels), dtype=dtype))

    @classmethod
    def from_scalar(
        cls,
        rows: int,
        cols: int,
        value: float | tuple[float, ...],
        dtype: DTypeLike = np.uint8,
    ) -> Mat:
        """A matrix filled with ``value``; a tuple gives one value per channel."""
        if isinstance(value, tuple):
            shape = _shape(rows, cols, len(value))
        else:
            shape = _shape(rows, cols, 1)
        return cls(np.full(shape, value, dtype=dtype))

    # -- Accessors ----------------------------------------------------------

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._live().shape)

    @property
    def rows(self) -> int:
        return int(self._live().shape[0])

    @property
    def cols(self) -> int:
        return int(self._live().shape[1])

    @property
    def channels(self) -> int:
        array = self._live()
        return 1 if array.ndim == 2 else int(array.shape[2])

    @property
    def is_empty(self) -> bool:
        return self.ptr is None or self.ptr.size == 0

    def to_array(self) -> NDArray[Any]:
        """Return a copy of the pixel data."""
        return self._live().copy()

    def _live(self) -> NDArray[Any]:
        if self.ptr is None:
            raise ValueError("Mat has been released")
        return self.ptr


class VecMat(Handle):
    """Handle owning an ordered sequence of image matrices, indexable 0..n-1."""

    __slots__ = ()

    ptr: list[NDArray[Any]] | None

    @classmethod
    def from_mats(cls, mats: Iterable[Mat]) -> VecMat:
        """Build a sequence owning copies of the given matrices."""
        return cls([mat.to_array() for mat in mats])

    @classmethod
    def from_arrays(cls, arrays: Iterable[NDArray[Any]]) -> VecMat:
        return cls([np.array(a, copy=True, order="C") for a in arrays])

    def __len__(self) -> int:
        return len(self._live())

    def __getitem__(self, index: int) -> Mat:
        """Return a new Mat owning a copy of element ``index``."""
        return Mat(self._live()[index].copy())

    def __iter__(self) -> Iterator[Mat]:
        for array in self._live():
            yield Mat(array.copy())

    def to_arrays(self) -> list[NDArray[Any]]:
        return [a.copy() for a in self._live()]

    def _live(self) -> list[NDArray[Any]]:
        if self.ptr is None:
            raise ValueError("VecMat has been released")
        return self.ptr


# ---------------------------------------------------------------------------
# Algorithm objects
# ---------------------------------------------------------------------------


class MergeMertens(Handle):
    """Handle owning a configured Mertens exposure-fusion algorithm."""

    __slots__ = ()

    ptr: cv2.MergeMertens | None

    @property
    def contrast_weight(self) -> float:
        return float(self._live().getContrastWeight())

    @property
    def saturation_weight(self) -> float:
        return float(self._live().getSaturationWeight())

    @property
    def exposure_weight(self) -> float:
        return float(self._live().getExposureWeight())

    def _live(self) -> cv2.MergeMertens:
        if self.ptr is None:
            raise ValueError("MergeMertens has been released")
        return self.ptr


class AlignMTB(Handle):
    """Handle owning a configured median-threshold-bitmap alignment algorithm."""

    __slots__ = ()

    ptr: cv2.AlignMTB | None

    @property
    def max_bits(self) -> int:
        return int(self._live().getMaxBits())

    @property
    def exclude_range(self) -> int:
        return int(self._live().getExcludeRange())

    @property
    def cut(self) -> bool:
        return bool(self._live().getCut())

    def _live(self) -> cv2.AlignMTB:
        if self.ptr is None:
            raise ValueError("AlignMTB has been released")
        return self.ptr


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Point:
    """Integer pixel coordinates, passed by value."""

    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (int(self.x), int(self.y))


def _shape(rows: int, cols: int, channels: int) -> tuple[int, ...]:
    return (rows, cols) if channels == 1 else (rows, cols, channels)
