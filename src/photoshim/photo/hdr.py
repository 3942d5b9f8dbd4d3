"""HDR entry points: Mertens exposure fusion and MTB exposure alignment.

Algorithm handles are created once and borrowed by each ``*_process`` call;
they stay valid until the caller releases them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import cv2
import numpy as np

from photoshim.core.handles import AlignMTB, Mat, MergeMertens, VecMat
from photoshim.core.status import Callback1, Invocation, Status

if TYPE_CHECKING:
    from numpy.typing import NDArray

DEFAULT_CONTRAST_WEIGHT: float = 1.0
DEFAULT_SATURATION_WEIGHT: float = 1.0
DEFAULT_EXPOSURE_WEIGHT: float = 0.0

DEFAULT_MAX_BITS: int = 6
DEFAULT_EXCLUDE_RANGE: int = 4
DEFAULT_CUT: bool = True


# ---------------------------------------------------------------------------
# Mertens fusion
# ---------------------------------------------------------------------------


def merge_mertens_create(callback: Callback1[MergeMertens]) -> Status | None:
    with Invocation("MergeMertens_Create", callback) as call:
        call.complete(MergeMertens(cv2.createMergeMertens()))
    return call.status


def merge_mertens_create_with_params(
    contrast_weight: float,
    saturation_weight: float,
    exposure_weight: float,
    callback: Callback1[MergeMertens],
) -> Status | None:
    with Invocation("MergeMertens_CreateWithParams", callback) as call:
        merge = cv2.createMergeMertens(
            contrast_weight=contrast_weight,
            saturation_weight=saturation_weight,
            exposure_weight=exposure_weight,
        )
        call.complete(MergeMertens(merge))
    return call.status


def merge_mertens_process(b: MergeMertens, src: VecMat, callback: Callback1[Mat]) -> Status | None:
    """Fuse an exposure stack into one float32 image with values around [0, 1]."""
    with Invocation("MergeMertens_Process", callback) as call:
        merge = call.borrow(b, MergeMertens)
        dst = merge.process(call.borrow(src, VecMat))
        call.complete(Mat(dst))
    return call.status


# ---------------------------------------------------------------------------
# Median threshold bitmap alignment
# ---------------------------------------------------------------------------


def align_mtb_create(callback: Callback1[AlignMTB]) -> Status | None:
    with Invocation("AlignMTB_Create", callback) as call:
        call.complete(AlignMTB(cv2.createAlignMTB()))
    return call.status


def align_mtb_create_with_params(
    max_bits: int,
    exclude_range: int,
    cut: bool,
    callback: Callback1[AlignMTB],
) -> Status | None:
    with Invocation("AlignMTB_CreateWithParams", callback) as call:
        align = cv2.createAlignMTB(max_bits=max_bits, exclude_range=exclude_range, cut=cut)
        call.complete(AlignMTB(align))
    return call.status


def align_mtb_process(b: AlignMTB, src: VecMat, callback: Callback1[VecMat]) -> Status | None:
    """Align every frame of ``src`` to the middle one.

    The binding writes shifted frames into the list it is given, so it gets
    fresh copies of the inputs; the delivered sequence owns them. It cannot
    hand back the cropped views a ``cut`` algorithm produces, so the crop to
    the region covered by every shifted frame is applied here.
    """
    with Invocation("AlignMTB_Process", callback) as call:
        align = call.borrow(b, AlignMTB)
        frames = call.borrow(src, VecMat)
        dst = [frame.copy() for frame in frames]
        align.process(frames, dst)
        if align.getCut():
            dst = _cut_to_common_area(align, frames, dst)
        call.complete(VecMat(dst))
    return call.status


def _cut_to_common_area(
    align: cv2.AlignMTB,
    frames: list[NDArray[Any]],
    aligned: list[NDArray[Any]],
) -> list[NDArray[Any]]:
    pivot = cv2.cvtColor(frames[len(frames) // 2], cv2.COLOR_RGB2GRAY)
    shifts = [(0, 0)]
    for i, frame in enumerate(frames):
        if i != len(frames) // 2:
            x, y = align.calculateShift(pivot, cv2.cvtColor(frame, cv2.COLOR_RGB2GRAY))
            shifts.append((int(x), int(y)))

    max_x = max(x for x, _ in shifts)
    max_y = max(y for _, y in shifts)
    min_x = min(x for x, _ in shifts)
    min_y = min(y for _, y in shifts)
    rows, cols = aligned[0].shape[:2]
    width, height = cols - max_x + min_x, rows - max_y + min_y
    if width <= 0 or height <= 0:
        raise ValueError(f"alignment shifts leave no common area in a {cols}x{rows} frame")
    return [np.ascontiguousarray(a[max_y : max_y + height, max_x : max_x + width]) for a in aligned]
