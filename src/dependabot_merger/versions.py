"""
Target version extraction from dependency PR titles.
"""

import re

# "to 1.2.3", optionally "-pre.1", a literal "a0", and "+build.1".
_TARGET_VERSION_RE = re.compile(
    r"to (\d+\.\d+\.\d+(?:-[a-zA-Z0-9.]+)?(?:a0)?(?:\+[a-zA-Z0-9.]+)?)"
)


def extract_target_version(title: str) -> str | None:
    """
    Extract the version a PR title bumps to.

    Only the first ``to <version>`` occurrence is considered and the version
    is returned exactly as written.

    Args:
        title: Pull request title

    Returns:
        The target version, or None if the title has no match
    """
    match = _TARGET_VERSION_RE.search(title)
    if match is None:
        return None
    return match.group(1)
