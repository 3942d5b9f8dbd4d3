"""Seamless cloning entry points: Poisson-based color, illumination and texture edits."""

from __future__ import annotations

import cv2

from photoshim.core.handles import Mat, Point
from photoshim.core.status import Callback1, Invocation, Status

# seamless_clone flags
NORMAL_CLONE: int = cv2.NORMAL_CLONE
MIXED_CLONE: int = cv2.MIXED_CLONE
MONOCHROME_TRANSFER: int = cv2.MONOCHROME_TRANSFER


def color_change(
    src: Mat,
    mask: Mat,
    red_mul: float,
    green_mul: float,
    blue_mul: float,
    callback: Callback1[Mat],
) -> Status | None:
    """Multiply the color of the masked region by per-channel factors."""
    with Invocation("ColorChange", callback) as call:
        dst = cv2.colorChange(
            call.borrow(src, Mat),
            call.borrow(mask, Mat),
            red_mul=red_mul,
            green_mul=green_mul,
            blue_mul=blue_mul,
        )
        call.complete(Mat(dst))
    return call.status


def seamless_clone(
    src: Mat,
    dst: Mat,
    mask: Mat,
    p: Point,
    flags: int,
    callback: Callback1[Mat],
) -> Status | None:
    """Blend the masked region of ``src`` into ``dst`` centred at ``p``.

    The result is a new matrix the size of ``dst``; ``dst`` itself is not
    modified.
    """
    with Invocation("SeamlessClone", callback) as call:
        blend = cv2.seamlessClone(
            call.borrow(src, Mat),
            call.borrow(dst, Mat),
            call.borrow(mask, Mat),
            p.as_tuple(),
            flags,
        )
        call.complete(Mat(blend))
    return call.status


def illumination_change(
    src: Mat,
    mask: Mat,
    alpha: float,
    beta: float,
    callback: Callback1[Mat],
) -> Status | None:
    with Invocation("IlluminationChange", callback) as call:
        dst = cv2.illuminationChange(
            call.borrow(src, Mat),
            call.borrow(mask, Mat),
            alpha=alpha,
            beta=beta,
        )
        call.complete(Mat(dst))
    return call.status


def texture_flattening(
    src: Mat,
    mask: Mat,
    low_threshold: float,
    high_threshold: float,
    kernel_size: int,
    callback: Callback1[Mat],
) -> Status | None:
    """Wash out the texture inside the mask, keeping only Canny edges."""
    with Invocation("TextureFlattening", callback) as call:
        dst = cv2.textureFlattening(
            call.borrow(src, Mat),
            call.borrow(mask, Mat),
            low_threshold=low_threshold,
            high_threshold=high_threshold,
            kernel_size=kernel_size,
        )
        call.complete(Mat(dst))
    return call.status
