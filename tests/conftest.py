"""Shared fixtures: callback recorders and small synthetic images."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
import pytest

from photoshim.core.handles import Mat, VecMat
from photoshim.core.status import set_handle_checks

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from numpy.typing import NDArray


class Recorder:
    """Callback that remembers every delivery."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *handles: Any) -> None:
        self.calls.append(handles)

    @property
    def count(self) -> int:
        return len(self.calls)

    def single(self) -> Any:
        assert self.count == 1, f"callback invoked {self.count} times"
        (handle,) = self.calls[0]
        return handle


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def recorder_factory() -> Callable[[], Recorder]:
    return Recorder


@pytest.fixture(autouse=True)
def _handle_checks_on() -> Iterator[None]:
    set_handle_checks(True)
    yield
    set_handle_checks(True)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


def make_photo(rows: int = 32, cols: int = 32, seed: int = 0) -> NDArray[np.uint8]:
    """Deterministic 8-bit BGR image: gradients plus mild noise."""
    rng = np.random.default_rng(seed)
    y, x = np.mgrid[0:rows, 0:cols]
    base = np.stack(
        [
            (x * 255 / max(cols - 1, 1)),
            (y * 255 / max(rows - 1, 1)),
            ((x + y) * 127 / max(rows + cols - 2, 1)),
        ],
        axis=-1,
    )
    noise = rng.normal(0, 6, size=base.shape)
    return np.clip(base + noise, 0, 255).astype(np.uint8)


@pytest.fixture()
def photo() -> Mat:
    return Mat.from_array(make_photo())


@pytest.fixture()
def gray_photo() -> Mat:
    return Mat.from_array(make_photo()[:, :, 1])


@pytest.fixture()
def center_mask() -> Mat:
    mask = np.zeros((32, 32), dtype=np.uint8)
    mask[8:24, 8:24] = 255
    return Mat.from_array(mask)


@pytest.fixture()
def exposures() -> VecMat:
    """Three identically-sized exposures of the same scene."""
    scene = make_photo(64, 64).astype(np.float32)
    return VecMat.from_arrays(np.clip(scene * gain, 0, 255).astype(np.uint8) for gain in (0.5, 1.0, 1.6))


@pytest.fixture()
def frames() -> VecMat:
    """Three noisy frames of the same scene."""
    return VecMat.from_arrays(make_photo(32, 32, seed=s) for s in (1, 2, 3))
