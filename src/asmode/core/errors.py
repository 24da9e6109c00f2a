#!/usr/bin/env python3
"""
ASMODE FAULTS
-------------
Typed failures raised inside the editing core.

MalformedInputFault never leaves the core: the classifier downgrades it to an
UNKNOWN line and the indentation engine to column 0. ConfigurationFault is
the only fault surfaced to callers, as a rejected settings change.

Author: Asmode Team
Date: 2026-10-18
"""


class AsmodeError(Exception):
    """Base class for every asmode failure."""


class MalformedInputFault(AsmodeError):
    """Pattern evaluation could not make sense of a line."""


class ConfigurationFault(AsmodeError):
    """
    A settings change was rejected (unknown comment style, bad tab stops).
    The previous configuration stays active.
    """

    def __init__(self, option: str, value, reason: str = ""):
        self.option = option
        self.value = value
        message = f"Invalid value for '{option}': {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
