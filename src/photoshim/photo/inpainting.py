"""Image restoration from the neighbourhood of a masked region."""

from __future__ import annotations

import cv2

from photoshim.core.handles import Mat
from photoshim.core.status import Callback1, Invocation, Status

INPAINT_NS: int = cv2.INPAINT_NS
INPAINT_TELEA: int = cv2.INPAINT_TELEA


def photo_inpaint(
    src: Mat,
    mask: Mat,
    inpaint_radius: float,
    algorithm_type: int,
    callback: Callback1[Mat],
) -> Status | None:
    """Fill the non-zero pixels of ``mask`` (8-bit, single channel) from their surroundings."""
    with Invocation("PhotoInpaint", callback) as call:
        dst = cv2.inpaint(call.borrow(src, Mat), call.borrow(mask, Mat), inpaint_radius, algorithm_type)
        call.complete(Mat(dst))
    return call.status
