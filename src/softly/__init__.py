"""Soft assertions: collect every failing assertion and report them together."""

from softly.assertions import navigation
from softly.collector import FailureCollector
from softly.config import SoftAssertionsConfig, load_config
from softly.errors import AssertionFailure, SoftAssertionError, SoftProxyCreationError
from softly.location import LocationAttributor, LocationFrame, register_rebuilder
from softly.proxies import FailedNavigation, SoftProxies
from softly.report import build_aggregate, checkpoint
from softly.soft_assertions import SoftAssertions, assert_softly, soft_assertions

__all__ = [
    "AssertionFailure",
    "FailedNavigation",
    "FailureCollector",
    "LocationAttributor",
    "LocationFrame",
    "SoftAssertionError",
    "SoftAssertions",
    "SoftAssertionsConfig",
    "SoftProxies",
    "SoftProxyCreationError",
    "assert_softly",
    "build_aggregate",
    "checkpoint",
    "load_config",
    "navigation",
    "register_rebuilder",
    "soft_assertions",
]
