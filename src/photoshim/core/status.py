"""Status values and the envelope every entry point runs in.

An entry point returns ``None`` on success, after delivering its outputs to
the caller's callback exactly once. On failure it returns a ``Status`` and the
callback is never invoked.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeVar

import cv2

from photoshim.config import get_settings
from photoshim.core.handles import Handle, Mat

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

H = TypeVar("H", bound=Handle)

# Result channels: one output handle, or two (pencil sketch).
Callback1 = Callable[[H], None]
Callback2 = Callable[[Mat, Mat], None]


class StatusKind(StrEnum):
    OK = "ok"
    LIBRARY_ERROR = "library_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class Status:
    """Outcome of a failed entry point.

    ``file`` and ``line`` point at the adapter line that was executing when the
    failure was detected; ``func`` names the native routine when the library
    reports one, otherwise the entry point.
    """

    kind: StatusKind
    message: str
    code: int = -1
    func: str = ""
    file: str = ""
    line: int = 0

    def __str__(self) -> str:
        return f"{self.kind}: {self.message} ({self.func} at {self.file}:{self.line})"


def is_ok(status: Status | None) -> bool:
    """Return True for the success sentinel."""
    return status is None or status.kind is StatusKind.OK


class PhotoError(RuntimeError):
    """A non-OK ``Status`` raised as an exception."""

    def __init__(self, status: Status) -> None:
        super().__init__(str(status))
        self.status = status


class HandleError(ValueError):
    """An input handle failed validation before the native call."""


# ---------------------------------------------------------------------------
# Handle validation switch
# ---------------------------------------------------------------------------

# Read from settings on first use.
_check_handles: bool | None = None


def set_handle_checks(enabled: bool) -> None:
    """Enable or disable input-handle validation for all entry points."""
    global _check_handles
    _check_handles = enabled


def handle_checks_enabled() -> bool:
    global _check_handles
    if _check_handles is None:
        _check_handles = get_settings().check_handles
    return _check_handles


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class Invocation:
    """Exception-trapping envelope for one entry-point call.

    Usage::

        with Invocation("Stylization", callback) as call:
            dst = cv2.stylization(call.borrow(src, Mat), sigma_s=sigma_s, sigma_r=sigma_r)
            call.complete(Mat(dst))
        return call.status
    """

    def __init__(self, name: str, callback: Callable[..., None]) -> None:
        self.name = name
        self.status: Status | None = None
        self._callback = callback
        self._outputs: tuple[Handle, ...] | None = None

    def borrow(self, handle: Handle | None, kind: type[H]) -> Any:
        """Dereference an input handle for the duration of the call."""
        if handle_checks_enabled():
            if handle is None:
                raise HandleError(f"{self.name}: {kind.__name__} handle is null")
            if not isinstance(handle, kind):
                raise HandleError(f"{self.name}: expected {kind.__name__} handle, got {type(handle).__name__}")
            if handle.released:
                raise HandleError(f"{self.name}: {kind.__name__} handle has been released")
        return None if handle is None else handle.ptr

    def complete(self, *outputs: Handle) -> None:
        """Record freshly owned output handles for delivery."""
        self._outputs = outputs

    def __enter__(self) -> Invocation:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc is None:
            if self._outputs is None:
                self.status = Status(
                    kind=StatusKind.INTERNAL_ERROR,
                    message=f"{self.name} produced no result",
                    func=self.name,
                )
                self._log_failure()
                return False
            outputs, self._outputs = self._outputs, None
            self._callback(*outputs)
            return False

        if not isinstance(exc, Exception):
            # KeyboardInterrupt, SystemExit and friends are not ours to report.
            return False

        self._discard_outputs()
        self.status = self._status_from(exc, tb)
        self._log_failure()
        return True

    def _status_from(self, exc: Exception, tb: TracebackType | None) -> Status:
        frames = traceback.extract_tb(tb)
        where = frames[-1] if frames else None
        file = where.filename if where is not None else ""
        line = (where.lineno or 0) if where is not None else 0

        if isinstance(exc, cv2.error):
            return Status(
                kind=StatusKind.LIBRARY_ERROR,
                message=str(exc).strip() or type(exc).__name__,
                code=_int_attr(exc, "code"),
                func=str(getattr(exc, "func", "") or self.name),
                file=file,
                line=line,
            )
        return Status(
            kind=StatusKind.INTERNAL_ERROR,
            message=str(exc) or type(exc).__name__,
            func=self.name,
            file=file,
            line=line,
        )

    def _discard_outputs(self) -> None:
        if self._outputs is not None:
            for handle in self._outputs:
                handle.release()
            self._outputs = None

    def _log_failure(self) -> None:
        if self.status is not None:
            logger.debug("%s failed (%s): %s", self.name, self.status.kind, self.status.message)


def _int_attr(exc: BaseException, name: str) -> int:
    value = getattr(exc, name, None)
    try:
        return int(value) if value is not None else -1
    except (TypeError, ValueError):
        return -1
