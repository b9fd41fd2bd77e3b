"""
Version Threshold — the single predicate deciding which side of the
PodSecurityPolicy removal a Kubernetes version falls on.

Both the chart builder and the status reconciler call through here so the
value they write and the value they expect can never disagree.
"""

import semver

DEFAULT_PSP_THRESHOLD = "1.25.0"


class InvalidVersion(ValueError):
    """Raised when a version string cannot be parsed as a semantic version."""

    def __init__(self, raw: str, detail: str = ""):
        self.raw = raw
        message = f"Invalid version {raw!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def parse_version(raw: str) -> semver.Version:
    """
    Parse a Kubernetes version string such as "v1.26.3+rke2r1".

    A leading "v" is accepted and minor/patch may be omitted ("1.25" is
    1.25.0). Build metadata is kept but never affects ordering.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidVersion(str(raw), "empty version")
    text = raw.strip()
    if text[0] in "vV":
        text = text[1:]
    try:
        return semver.Version.parse(text, optional_minor_and_patch=True)
    except (ValueError, TypeError) as e:
        raise InvalidVersion(raw, str(e)) from e


def is_below_threshold(version: semver.Version, threshold: semver.Version) -> bool:
    """Strictly `version < threshold`; the threshold itself is not below."""
    return version < threshold


def psp_enabled(raw_version: str, threshold: str = DEFAULT_PSP_THRESHOLD) -> bool:
    """PodSecurityPolicy manifests are wanted only below the threshold."""
    return is_below_threshold(parse_version(raw_version), parse_version(threshold))
