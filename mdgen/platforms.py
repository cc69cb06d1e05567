"""Platform — the closed set of host operating platforms.

Each member carries a stable numeric code.  The code is only ever used as
the key into the default output rule table.
"""

from __future__ import annotations

import sys
from enum import Enum

from mdgen.errors import PlatformUnsupportedError

# sys.platform prefixes -> platform name
_SYSTEM_PREFIXES: tuple[tuple[str, str], ...] = (
    ("win32", "WINDOWS"),
    ("cygwin", "WINDOWS"),
    ("darwin", "MACOS"),
    ("linux", "LINUX"),
)


class Platform(Enum):
    """Known host platforms."""

    WINDOWS = 1
    MACOS = 2
    LINUX = 3

    @property
    def code(self) -> int:
        return self.value

    @property
    def code_string(self) -> str:
        """The code as a string, the form used for rule lookup."""
        return str(self.value)

    @classmethod
    def current(cls, system: str | None = None) -> Platform:
        """Classify the host platform.

        Parameters
        ----------
        system:
            A ``sys.platform``-style identifier.  Defaults to the running
            interpreter's ``sys.platform``.

        Raises
        ------
        PlatformUnsupportedError
            If *system* does not match any known platform.
        """
        system = sys.platform if system is None else system
        lowered = system.lower()
        for prefix, name in _SYSTEM_PREFIXES:
            if lowered.startswith(prefix):
                return cls[name]
        raise PlatformUnsupportedError(f"Unsupported platform: {system!r}")

    @classmethod
    def from_code(cls, code: int | str) -> Platform:
        """Return the platform whose code equals *code*."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            raise PlatformUnsupportedError(f"Unknown platform code: {code!r}") from None
