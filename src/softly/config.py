from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

# Module-name prefixes of frames that never count as user test code.
# Entries ending in "." or "_" match as raw prefixes, others match the
# module itself and its submodules.
DEFAULT_INTERNAL_PREFIXES: tuple[str, ...] = (
    "softly",
    # test runners
    "_pytest",
    "pytest",
    "pluggy",
    "unittest",
    "nose2",
    # interpreter machinery
    "importlib",
    "runpy",
    "functools",
    "contextlib",
    "inspect",
    # IDE launchers
    "pydevd",
    "_pydevd_bundle",
    "_pydev_",
    "_jb_",
    "teamcity",
    "vscode_pytest",
    "unittestadapter",
)

PROXY_MARKER = "$SoftProxy"


class SoftAssertionsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    internal_prefixes: list[str] = list(DEFAULT_INTERNAL_PREFIXES)
    proxy_markers: list[str] = [PROXY_MARKER]
    decorate_line_numbers: bool = True
    debug_log: Path | None = None
    verbose: bool = False

    @field_validator("internal_prefixes", "proxy_markers")
    @classmethod
    def no_blank_entries(cls, v: list[str]) -> list[str]:
        # a blank prefix would match every frame
        for entry in v:
            if not entry.strip():
                raise ValueError("entries must not be blank")
        return v


def load_config(path: Path) -> SoftAssertionsConfig:
    """Load and validate a soft assertions config from a YAML file."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}") from exc
    except OSError as exc:
        raise FileNotFoundError(f"Unable to read {path}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a YAML mapping in {path}")

    config = SoftAssertionsConfig(**raw)

    # Resolve a relative debug_log path relative to the config file location
    if config.debug_log is not None and not config.debug_log.is_absolute():
        config.debug_log = (path.parent.resolve() / config.debug_log).resolve()

    return config
