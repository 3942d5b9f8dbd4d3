"""Tests for the non-photorealistic rendering and inpainting entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pytest

from photoshim.core.handles import Mat
from photoshim.core.status import StatusKind
from photoshim.photo.inpainting import INPAINT_NS, INPAINT_TELEA, photo_inpaint
from photoshim.photo.npr import (
    NORMCONV_FILTER,
    RECURS_FILTER,
    detail_enhance,
    edge_preserving_filter,
    pencil_sketch,
    stylization,
)

if TYPE_CHECKING:
    from conftest import Recorder


class TestDetailEnhance:
    def test_returns_color_image(self, photo: Mat, recorder: Recorder) -> None:
        assert detail_enhance(photo, 10.0, 0.15, recorder) is None
        assert recorder.single().shape == (32, 32, 3)

    def test_single_channel_is_library_error(self, gray_photo: Mat, recorder: Recorder) -> None:
        status = detail_enhance(gray_photo, 10.0, 0.15, recorder)
        assert status is not None
        assert status.kind is StatusKind.LIBRARY_ERROR
        assert recorder.count == 0


class TestEdgePreservingFilter:
    @pytest.mark.parametrize("kind", [RECURS_FILTER, NORMCONV_FILTER])
    def test_both_filter_kinds(self, photo: Mat, recorder: Recorder, kind: int) -> None:
        assert edge_preserving_filter(photo, kind, 60.0, 0.4, recorder) is None
        assert recorder.single().shape == (32, 32, 3)


class TestPencilSketch:
    def test_dual_output_with_empty_placeholders(self, photo: Mat, recorder: Recorder) -> None:
        status = pencil_sketch(photo, Mat.empty(), Mat.empty(), 60.0, 0.07, 0.05, recorder)

        assert status is None
        assert recorder.count == 1
        gray, color = recorder.calls[0]
        assert isinstance(gray, Mat)
        assert isinstance(color, Mat)
        assert gray.shape == (32, 32)
        assert gray.channels == 1
        assert color.shape == (32, 32, 3)
        assert color.channels == 3

    def test_missing_placeholders_accepted(self, photo: Mat, recorder: Recorder) -> None:
        assert pencil_sketch(photo, None, None, 60.0, 0.07, 0.05, recorder) is None
        assert len(recorder.calls[0]) == 2

    def test_outputs_independent_of_scratch_buffers(self, photo: Mat, recorder: Recorder) -> None:
        dst1 = Mat.zeros(32, 32)
        dst2 = Mat.zeros(32, 32, channels=3)

        assert pencil_sketch(photo, dst1, dst2, 60.0, 0.07, 0.05, recorder) is None

        gray, color = recorder.calls[0]
        assert gray.ptr is not dst1.ptr
        assert color.ptr is not dst2.ptr
        assert not np.shares_memory(gray.ptr, dst1.ptr)
        assert not np.shares_memory(color.ptr, dst2.ptr)
        dst1.release()
        dst2.release()
        assert gray.shape == (32, 32)
        assert color.shape == (32, 32, 3)

    def test_failure_delivers_nothing(self, photo: Mat, recorder: Recorder) -> None:
        photo.release()
        status = pencil_sketch(photo, Mat.empty(), Mat.empty(), 60.0, 0.07, 0.05, recorder)
        assert status is not None
        assert status.kind is StatusKind.INTERNAL_ERROR
        assert recorder.count == 0


class TestStylization:
    def test_returns_color_image(self, photo: Mat, recorder: Recorder) -> None:
        assert stylization(photo, 60.0, 0.45, recorder) is None
        out = recorder.single()
        assert out.shape == (32, 32, 3)
        assert out.to_array().dtype == np.uint8


class TestPhotoInpaint:
    @pytest.mark.parametrize("algorithm", [INPAINT_NS, INPAINT_TELEA])
    def test_fills_masked_region(self, photo: Mat, center_mask: Mat, recorder: Recorder, algorithm: int) -> None:
        src = photo.to_array()
        src[8:24, 8:24] = 255
        damaged = Mat.from_array(src)

        assert photo_inpaint(damaged, center_mask, 3.0, algorithm, recorder) is None

        out = recorder.single().to_array()
        assert out.shape == (32, 32, 3)
        # Pixels outside the mask are preserved.
        np.testing.assert_array_equal(out[0:6], src[0:6])
        # The input handle is untouched.
        np.testing.assert_array_equal(damaged.to_array(), src)

    def test_mask_size_mismatch_is_library_error(self, photo: Mat, recorder: Recorder) -> None:
        status = photo_inpaint(photo, Mat.zeros(16, 16), 3.0, INPAINT_TELEA, recorder)
        assert status is not None
        assert status.kind is StatusKind.LIBRARY_ERROR
        assert status.message
        assert recorder.count == 0
