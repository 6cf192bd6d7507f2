"""Attribute collected failures to the line of test code that produced them."""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from types import CodeType
from typing import Callable, Iterable

from softly.config import DEFAULT_INTERNAL_PREFIXES, PROXY_MARKER
from softly.verbose import LOGGER_NAME

Rebuilder = Callable[[BaseException, str], BaseException]

# Failure kinds that cannot carry rebuild_with_message themselves, keyed by exact type.
_REBUILDERS: dict[type[BaseException], Rebuilder] = {
    AssertionError: lambda failure, message: AssertionError(message),
}


def register_rebuilder(kind: type[BaseException], rebuilder: Rebuilder) -> None:
    """Teach the attributor how to rebuild failures of exactly ``kind``."""
    _REBUILDERS[kind] = rebuilder


@dataclass(frozen=True)
class LocationFrame:
    """One point of a call stack.

    Attributes:
        qualified_name: Full module name of the frame (``tests.test_orders``).
        member_name: Qualified name of the executing code (``TestOrders.test_total``).
        line_number: Line being executed in that frame.
    """

    qualified_name: str
    member_name: str
    line_number: int

    @property
    def location(self) -> str:
        return self.qualified_name.rpartition(".")[2]

    def format(self) -> str:
        return f"at {self.location}.{self.member_name}({self.location}:{self.line_number})"


def _member_name(code: CodeType) -> str:
    return getattr(code, "co_qualname", code.co_name)


def stack_frames(failure: BaseException) -> list[LocationFrame]:
    """Return the failure's call stack, most recent call first."""
    frames = [
        LocationFrame(
            qualified_name=frame.f_globals.get("__name__", "?"),
            member_name=_member_name(frame.f_code),
            line_number=lineno,
        )
        for frame, lineno in traceback.walk_tb(failure.__traceback__)
    ]
    frames.reverse()
    return frames


def _matches_prefix(module_name: str, prefix: str) -> bool:
    if prefix.endswith((".", "_")):
        return module_name.startswith(prefix)
    return module_name == prefix or module_name.startswith(prefix + ".")


class LocationAttributor:
    """Append the first user-code location of a failure's stack to its message."""

    def __init__(
        self,
        internal_prefixes: Iterable[str] = DEFAULT_INTERNAL_PREFIXES,
        proxy_markers: Iterable[str] = (PROXY_MARKER,),
        logger: logging.Logger | None = None,
    ):
        self.internal_prefixes = tuple(internal_prefixes)
        self.proxy_markers = tuple(proxy_markers)
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def is_internal(self, frame: LocationFrame) -> bool:
        if any(marker in frame.member_name for marker in self.proxy_markers):
            return True
        return any(_matches_prefix(frame.qualified_name, p) for p in self.internal_prefixes)

    def first_user_frame(self, failure: BaseException) -> LocationFrame | None:
        for frame in stack_frames(failure):
            if not self.is_internal(frame):
                return frame
        return None

    def decorate(self, failure: BaseException) -> BaseException:
        """Return a copy of ``failure`` whose message ends with its user-code location.

        The copy has the same type, cause, context, traceback, notes and
        suppressed failures. When no user frame exists or the failure kind
        cannot be rebuilt, the original failure is returned unchanged.
        """
        frame = self.first_user_frame(failure)
        if frame is None:
            return failure

        message = f"{failure}\n{frame.format()}"
        try:
            rebuilt = self._rebuild(failure, message)
        except Exception as exc:
            self.logger.debug(f"Could not rebuild {type(failure).__name__}: {exc}")
            return failure
        if rebuilt is None:
            self.logger.debug(f"No rebuilder for {type(failure).__name__}, keeping original message")
            return failure
        if type(rebuilt) is not type(failure):
            self.logger.debug(
                f"Rebuilding {type(failure).__name__} produced {type(rebuilt).__name__}, keeping original"
            )
            return failure

        rebuilt.__cause__ = failure.__cause__
        rebuilt.__context__ = failure.__context__
        rebuilt.__suppress_context__ = failure.__suppress_context__
        if hasattr(failure, "__notes__"):
            rebuilt.__notes__ = list(failure.__notes__)
        add_suppressed = getattr(rebuilt, "add_suppressed", None)
        if add_suppressed is not None:
            for suppressed in getattr(failure, "suppressed", ()):
                add_suppressed(suppressed)
        return rebuilt.with_traceback(failure.__traceback__)

    @staticmethod
    def _rebuild(failure: BaseException, message: str) -> BaseException | None:
        rebuild_with_message = getattr(failure, "rebuild_with_message", None)
        if callable(rebuild_with_message):
            return rebuild_with_message(message)
        rebuilder = _REBUILDERS.get(type(failure))
        if rebuilder is None:
            return None
        return rebuilder(failure, message)
