"""Version string normalisation shared by all manifest parsers."""

import re

# Leading range operators (and any whitespace mixed in with them)
_PREFIX = re.compile(r"^[\s^~>=<!]+")
# An `||` alternative and everything after it
_ALTERNATIVE = re.compile(r"\s*\|\|.*$", re.DOTALL)


def clean_version(version: str) -> str:
    """Reduce a declared version to a single concrete version string.

    ``^4.17.21`` becomes ``4.17.21`` and ``>=1.0 || ^2.0`` becomes ``1.0``.
    Applying it twice gives the same result as applying it once.
    """
    version = _PREFIX.sub("", version)
    version = _ALTERNATIVE.sub("", version)
    return version.strip()
