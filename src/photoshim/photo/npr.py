"""Non-photorealistic rendering: edge-preserving smoothing and stylization."""

from __future__ import annotations

import cv2

from photoshim.core.handles import Mat
from photoshim.core.status import Callback1, Callback2, Invocation, Status

# edge_preserving_filter kinds
RECURS_FILTER: int = cv2.RECURS_FILTER
NORMCONV_FILTER: int = cv2.NORMCONV_FILTER


def detail_enhance(src: Mat, sigma_s: float, sigma_r: float, callback: Callback1[Mat]) -> Status | None:
    with Invocation("DetailEnhance", callback) as call:
        dst = cv2.detailEnhance(call.borrow(src, Mat), sigma_s=sigma_s, sigma_r=sigma_r)
        call.complete(Mat(dst))
    return call.status


def edge_preserving_filter(
    src: Mat,
    filter: int,  # noqa: A002 - boundary parameter name
    sigma_s: float,
    sigma_r: float,
    callback: Callback1[Mat],
) -> Status | None:
    with Invocation("EdgePreservingFilter", callback) as call:
        dst = cv2.edgePreservingFilter(call.borrow(src, Mat), flags=filter, sigma_s=sigma_s, sigma_r=sigma_r)
        call.complete(Mat(dst))
    return call.status


def pencil_sketch(
    src: Mat,
    dst1: Mat | None,
    dst2: Mat | None,
    sigma_s: float,
    sigma_r: float,
    shade_factor: float,
    callback: Callback2,
) -> Status | None:
    """Render a pencil sketch; delivers (grayscale sketch, color sketch).

    ``dst1`` and ``dst2`` are scratch buffers. Empty, released or missing
    placeholders are fine: the library then allocates the outputs. The
    delivered handles always own copies, independent of ``dst1``/``dst2``.
    """
    with Invocation("PencilSketch", callback) as call:
        gray, color = cv2.pencilSketch(
            call.borrow(src, Mat),
            _scratch(dst1),
            _scratch(dst2),
            sigma_s=sigma_s,
            sigma_r=sigma_r,
            shade_factor=shade_factor,
        )
        call.complete(Mat.from_array(gray), Mat.from_array(color))
    return call.status


def stylization(src: Mat, sigma_s: float, sigma_r: float, callback: Callback1[Mat]) -> Status | None:
    with Invocation("Stylization", callback) as call:
        dst = cv2.stylization(call.borrow(src, Mat), sigma_s=sigma_s, sigma_r=sigma_r)
        call.complete(Mat(dst))
    return call.status


def _scratch(buffer: Mat | None) -> object:
    if buffer is None or buffer.is_empty:
        return None
    return buffer.ptr
