"""Soft proxies: assertion objects whose failures are collected instead of raised."""

from __future__ import annotations

import functools
import inspect
import threading
import types
from typing import TYPE_CHECKING, Any, Callable

from softly.assertions.base import NAVIGATION_MARKER, AbstractAssert
from softly.config import PROXY_MARKER
from softly.errors import SoftProxyCreationError

if TYPE_CHECKING:
    from softly.collector import FailureCollector

ProxyKey = tuple[type, type]


def _public_methods(assert_class: type) -> dict[str, Callable[..., Any]]:
    """Public plain functions visible on ``assert_class``, most derived definition wins."""
    methods: dict[str, Callable[..., Any]] = {}
    for klass in reversed(assert_class.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name.startswith("_"):
                continue
            if inspect.isfunction(value):
                methods[name] = value
            else:
                # shadowed by a property, classmethod or attribute
                methods.pop(name, None)
    return methods


class SoftProxies:
    """Create and cache soft proxy classes for one collector.

    A proxy class is a subclass of the assertion class in which every public
    method is overridden: an ``AssertionError`` raised by the real method is
    handed to the collector and the proxy is returned so the chain goes on.
    A failed :func:`~softly.assertions.navigation` step returns a
    :class:`FailedNavigation` instead, which skips the checks chained after it.
    Assertion objects returned by a method are wrapped in turn.
    Proxy classes are synthesized once per ``(assert_class, actual_type)``.
    """

    def __init__(self, collector: FailureCollector):
        self.collector = collector
        self.construction_count = 0
        self._proxy_classes: dict[ProxyKey, type] = {}
        self._local = threading.local()

    def create_soft_assertion_proxy(self, assert_class: type, actual_type: type, actual: Any) -> Any:
        proxy_class = self.proxy_class_for(assert_class, actual_type)
        try:
            return proxy_class(actual)
        except Exception as exc:
            raise SoftProxyCreationError(
                f"Unable to create a soft {assert_class.__name__} for {actual!r}: {exc}"
            ) from exc

    def proxy_class_for(self, assert_class: type, actual_type: type) -> type:
        assert_class = getattr(assert_class, "__soft_proxy_of__", assert_class)
        _validate(assert_class, actual_type)
        key = (assert_class, actual_type)
        proxy_class = self._proxy_classes.get(key)
        if proxy_class is None:
            proxy_class = self._synthesize(assert_class)
            self._proxy_classes[key] = proxy_class
        return proxy_class

    def _synthesize(self, assert_class: type) -> type:
        proxy_name = f"{assert_class.__name__}{PROXY_MARKER}"
        namespace: dict[str, Any] = {
            "__module__": assert_class.__module__,
            "__qualname__": proxy_name,
            "__soft_proxy_of__": assert_class,
        }
        methods = _public_methods(assert_class)
        for name, method in methods.items():
            namespace[name] = self._intercept(name, method, proxy_name)

        try:
            proxy_class = types.new_class(
                proxy_name, (assert_class,), exec_body=lambda ns: ns.update(namespace)
            )
        except Exception as exc:
            raise SoftProxyCreationError(
                f"Cannot create a soft proxy for {assert_class.__name__}: {exc}"
            ) from exc

        self.construction_count += 1
        self.collector.logger.debug(f"Synthesized {proxy_name} intercepting {len(methods)} method(s)")
        return proxy_class

    def _intercept(self, name: str, method: Callable[..., Any], proxy_name: str) -> Callable[..., Any]:
        factory = self
        navigates = getattr(method, NAVIGATION_MARKER, False)

        @functools.wraps(method)
        def soft_method(proxy, *args, **kwargs):
            # calls made from inside another intercepted method keep raising,
            # so only the outermost call collects
            if factory._depth():
                return method(proxy, *args, **kwargs)
            factory._local.depth = 1
            try:
                result = method(proxy, *args, **kwargs)
            except AssertionError as failure:
                factory.collector.collect(failure)
                if navigates:
                    return FailedNavigation(f"{proxy_name}.{name}")
                return proxy
            finally:
                factory._local.depth = 0
            factory.collector.succeeded()
            return factory._wrap_result(proxy, result, navigates)

        soft_method.__code__ = soft_method.__code__.replace(
            co_name=f"{name}{PROXY_MARKER}",
            co_qualname=f"{proxy_name}.{name}",
        )
        return soft_method

    def _depth(self) -> int:
        return getattr(self._local, "depth", 0)

    def _wrap_result(self, proxy: Any, result: Any, navigated: bool = False) -> Any:
        if result is proxy or isinstance(result, FailedNavigation):
            return result
        if hasattr(type(result), "__soft_proxy_of__") or not _is_assertion_object(result, navigated):
            return result
        return self._adopt(result)

    def _adopt(self, result: Any) -> Any:
        """Return a soft proxy holding the same state as ``result``.

        The proxy is not constructed through ``__init__``: navigation results
        of other libraries may need more than the subject to be built.
        """
        actual = getattr(result, "actual", None)
        proxy_class = self.proxy_class_for(type(result), type(actual))
        try:
            wrapped = proxy_class.__new__(proxy_class)
            vars(wrapped).update(vars(result))
        except Exception as exc:
            raise SoftProxyCreationError(
                f"Unable to create a soft {type(result).__name__} for {actual!r}: {exc}"
            ) from exc
        return wrapped


class FailedNavigation:
    """Stand-in returned when a navigation step failed.

    The failure is already collected; any check chained after it is skipped
    and returns the stand-in again.
    """

    def __init__(self, step: str):
        self._step = step

    def __getattr__(self, name: str) -> Callable[..., FailedNavigation]:
        if name.startswith("__"):
            raise AttributeError(name)
        return self._skip

    def _skip(self, *args: Any, **kwargs: Any) -> FailedNavigation:
        return self

    def __repr__(self) -> str:
        return f"<FailedNavigation after {self._step}>"


def _is_assertion_object(value: Any, navigated: bool) -> bool:
    if isinstance(value, AbstractAssert):
        return True
    # assertion classes from other libraries hold their subject in ``actual``
    if isinstance(value, type) or type(value).__module__ == "builtins":
        return False
    return navigated or "actual" in getattr(value, "__dict__", {})


def _validate(assert_class: Any, actual_type: Any) -> None:
    if not isinstance(assert_class, type):
        raise SoftProxyCreationError(f"{assert_class!r} is not an assertion class")
    if not isinstance(actual_type, type):
        raise SoftProxyCreationError(f"{actual_type!r} is not a type")
    if getattr(assert_class, "__final__", False):
        raise SoftProxyCreationError(f"{assert_class.__name__} is final and cannot be proxied")
    supported = getattr(assert_class, "actual_types", None)
    if supported and actual_type is not type(None) and not issubclass(actual_type, tuple(supported)):
        names = ", ".join(t.__name__ for t in supported)
        raise SoftProxyCreationError(
            f"{assert_class.__name__} cannot check {actual_type.__name__} values (supports: {names})"
        )
