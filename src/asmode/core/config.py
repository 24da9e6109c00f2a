#!/usr/bin/env python3
"""
ASMODE SESSION CONFIGURATION
----------------------------
The settings one editing session runs with: comment style, tab stops,
comment column and the three behaviour toggles of the interactive commands.

Settings are supplied by the host, either directly or from a YAML file
such as:

    commentStyle: lineSemicolon
    tabStops: [16, 24]
    commentColumn: 40
    colonAfterLabel: true

Author: Asmode Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union

from ruamel.yaml import YAML, YAMLError

from asmode.core.errors import ConfigurationFault
from asmode.core.models import CommentStyle, TabStops

logger = logging.getLogger("asmode.config")

DEFAULT_TAB_STOPS: Tuple[int, ...] = tuple(range(8, 73, 8))

# Maps the recognised camelCase option names onto SessionConfig fields
OPTION_FIELDS = {
    "commentStyle": "comment_style",
    "colonAfterLabel": "colon_after_label",
    "tabAfterOperation": "tab_after_operation",
    "newlineAfterLabel": "newline_after_label",
    "tabStops": "tab_stops",
    "tabWidth": "tab_width",
    "commentColumn": "comment_column",
}


@dataclass(frozen=True)
class SessionConfig:
    """Validated, immutable snapshot of a session's settings."""
    comment_style: CommentStyle = CommentStyle.LINE_SEMICOLON
    colon_after_label: bool = True
    tab_after_operation: bool = True
    newline_after_label: bool = False
    tab_stops: Tuple[int, ...] = field(default=DEFAULT_TAB_STOPS)
    tab_width: int = 8
    comment_column: int = 32

    def __post_init__(self):
        style = self.comment_style
        if not isinstance(style, CommentStyle):
            resolved = CommentStyle.lookup(style)
            if resolved is None:
                raise ConfigurationFault("commentStyle", style, "unknown comment style")
            object.__setattr__(self, "comment_style", resolved)

        try:
            stops = tuple(int(s) for s in self.tab_stops)
        except (TypeError, ValueError):
            raise ConfigurationFault("tabStops", self.tab_stops, "expected a list of columns")
        if any(s < 0 for s in stops):
            raise ConfigurationFault("tabStops", self.tab_stops, "columns must be non-negative")
        if any(b < a for a, b in zip(stops, stops[1:])):
            raise ConfigurationFault("tabStops", self.tab_stops, "columns must be non-decreasing")
        object.__setattr__(self, "tab_stops", stops)

        for option, value in (("tabWidth", self.tab_width), ("commentColumn", self.comment_column)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationFault(option, value, "expected an integer")
        if self.tab_width < 1:
            raise ConfigurationFault("tabWidth", self.tab_width, "must be at least 1")
        if self.comment_column < 0:
            raise ConfigurationFault("commentColumn", self.comment_column, "must be non-negative")

        for option in ("colonAfterLabel", "tabAfterOperation", "newlineAfterLabel"):
            value = getattr(self, OPTION_FIELDS[option])
            if not isinstance(value, bool):
                raise ConfigurationFault(option, value, "expected true or false")

    @property
    def tab_stop_set(self) -> TabStops:
        return TabStops(stops=self.tab_stops, width=self.tab_width)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "SessionConfig":
        """Builds a config from camelCase options; unknown keys are rejected."""
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            if key not in OPTION_FIELDS:
                raise ConfigurationFault(str(key), value, "unrecognised option")
            kwargs[OPTION_FIELDS[key]] = value
        return cls(**kwargs)

    def updated(self, **changes: Any) -> "SessionConfig":
        """Returns a validated copy; the original is untouched on failure."""
        return replace(self, **changes)

    def to_mapping(self) -> Dict[str, Any]:
        fields = {value: key for key, value in OPTION_FIELDS.items()}
        data = {fields[name]: getattr(self, name) for name in fields}
        data["commentStyle"] = self.comment_style.config_name
        data["tabStops"] = list(self.tab_stops)
        return data


def load_config(path: Union[str, Path]) -> SessionConfig:
    """
    Reads session settings from a YAML file.
    An empty file yields the defaults.
    """
    config_path = Path(path)
    yaml = YAML(typ="safe")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.load(f)
    except FileNotFoundError:
        raise ConfigurationFault("config", str(config_path), "file not found")
    except YAMLError as e:
        logger.error(f"Unable to parse settings file {config_path}")
        raise ConfigurationFault("config", str(config_path), str(e))

    if data is None:
        return SessionConfig()
    if not isinstance(data, dict):
        raise ConfigurationFault("config", str(config_path), "top level must be a mapping")

    logger.debug(f"Loaded settings from {config_path}: {sorted(data)}")
    return SessionConfig.from_mapping(data)
