"""Non-local means denoising entry points.

The parameter-free forms leave every tuning argument to the library, so they
match the ``_with_params`` forms called with the defaults below.
"""

from __future__ import annotations

import cv2

from photoshim.core.handles import Mat, VecMat
from photoshim.core.status import Callback1, Invocation, Status

DEFAULT_H: float = 3.0
DEFAULT_H_COLOR: float = 3.0
DEFAULT_TEMPLATE_WINDOW_SIZE: int = 7
DEFAULT_SEARCH_WINDOW_SIZE: int = 21


def fast_nl_means_denoising(src: Mat, callback: Callback1[Mat]) -> Status | None:
    with Invocation("FastNlMeansDenoising", callback) as call:
        dst = cv2.fastNlMeansDenoising(call.borrow(src, Mat))
        call.complete(Mat(dst))
    return call.status


def fast_nl_means_denoising_with_params(
    src: Mat,
    h: float,
    template_window_size: int,
    search_window_size: int,
    callback: Callback1[Mat],
) -> Status | None:
    with Invocation("FastNlMeansDenoisingWithParams", callback) as call:
        dst = cv2.fastNlMeansDenoising(
            call.borrow(src, Mat),
            None,
            h=h,
            templateWindowSize=template_window_size,
            searchWindowSize=search_window_size,
        )
        call.complete(Mat(dst))
    return call.status


def fast_nl_means_denoising_colored(src: Mat, callback: Callback1[Mat]) -> Status | None:
    """Denoise a 3- or 4-channel 8-bit image in CIELAB space."""
    with Invocation("FastNlMeansDenoisingColored", callback) as call:
        dst = cv2.fastNlMeansDenoisingColored(call.borrow(src, Mat))
        call.complete(Mat(dst))
    return call.status


def fast_nl_means_denoising_colored_with_params(
    src: Mat,
    h: float,
    h_color: float,
    template_window_size: int,
    search_window_size: int,
    callback: Callback1[Mat],
) -> Status | None:
    with Invocation("FastNlMeansDenoisingColoredWithParams", callback) as call:
        dst = cv2.fastNlMeansDenoisingColored(
            call.borrow(src, Mat),
            None,
            h=h,
            hColor=h_color,
            templateWindowSize=template_window_size,
            searchWindowSize=search_window_size,
        )
        call.complete(Mat(dst))
    return call.status


def fast_nl_means_denoising_colored_multi(
    src: VecMat,
    img_to_denoise_index: int,
    temporal_window_size: int,
    callback: Callback1[Mat],
) -> Status | None:
    """Denoise one frame of a sequence using its temporal neighbours.

    ``temporal_window_size`` must be odd and the window must fit inside the
    sequence; the library reports violations.
    """
    with Invocation("FastNlMeansDenoisingColoredMulti", callback) as call:
        dst = cv2.fastNlMeansDenoisingColoredMulti(
            call.borrow(src, VecMat),
            img_to_denoise_index,
            temporal_window_size,
        )
        call.complete(Mat(dst))
    return call.status


def fast_nl_means_denoising_colored_multi_with_params(
    src: VecMat,
    img_to_denoise_index: int,
    temporal_window_size: int,
    h: float,
    h_color: float,
    template_window_size: int,
    search_window_size: int,
    callback: Callback1[Mat],
) -> Status | None:
    with Invocation("FastNlMeansDenoisingColoredMultiWithParams", callback) as call:
        dst = cv2.fastNlMeansDenoisingColoredMulti(
            call.borrow(src, VecMat),
            img_to_denoise_index,
            temporal_window_size,
            None,
            h=h,
            hColor=h_color,
            templateWindowSize=template_window_size,
            searchWindowSize=search_window_size,
        )
        call.complete(Mat(dst))
    return call.status
