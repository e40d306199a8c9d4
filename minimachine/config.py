# minimachine/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEV_MODE_VAR = "MINIMACHINE_DEV_MODE"
ENV_VAR = "MINIMACHINE_ENV"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    """Actor settings.

    dev_mode enables advisory diagnostics, such as a warning when an event is
    sent to an actor that is not active. It never changes behavior.
    """

    dev_mode: bool = False


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``environ`` (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ
    flag = env.get(DEV_MODE_VAR)
    if flag is not None:
        return Settings(dev_mode=flag.strip().lower() in _TRUTHY)
    return Settings(dev_mode=env.get(ENV_VAR, "").strip().lower() == "development")
