"""Type aliases used throughout dirkeeper."""

from __future__ import annotations

import os  # noqa: TC003
from collections.abc import Callable
from typing import Optional, Union

from dirkeeper._models import StateEvent

PathLike = Union[str, "os.PathLike[str]"]  # noqa: UP007
Listener = Callable[[StateEvent], None]
PasswordPrompt = Callable[[], Optional[str]]
