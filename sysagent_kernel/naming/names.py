"""
Name derivation shared by the chart builder and the bundle lookup.

The rules mirror the deployment system's own helpers byte for byte:
a derived name is recomputed at lookup time, so any divergence here means
the reconciler looks for a bundle that can never exist.
"""

import hashlib

MAX_NAME_LENGTH = 63
MANAGED_FRAGMENTS = ("managed", "system-upgrade-controller")


def hex_digest(s: str, n: int) -> str:
    """First `n` hex characters of the md5 of `s`."""
    return hashlib.md5(s.encode("utf-8")).hexdigest()[:n]


def safe_concat_name(*parts: str) -> str:
    """
    Join name parts with "-". Results of 64 characters or more are cut and
    suffixed with a sha256 fragment so they stay a valid, unique object name.
    """
    full = "-".join(parts)
    if len(full) < MAX_NAME_LENGTH + 1:
        return full
    digest = hashlib.sha256(full.encode("utf-8")).hexdigest()
    # the cut may land on a character that cannot end a name
    c = full[56]
    if ("a" <= c <= "z") or ("0" <= c <= "9"):
        return f"{full[:57]}-{digest[:5]}"
    return f"{full[:56]}-{digest[:6]}"


def limit(s: str, count: int) -> str:
    """Keep `s` only while shorter than `count`; otherwise cut to `count` with an md5 fragment."""
    if len(s) < count:
        return s
    return f"{s[:count - 6]}-{hex_digest(s, 5)}"


def managed_chart_name(cluster_name: str, name_limit: int = 48) -> str:
    """Name of the managed chart, before the deployment system adds its prefix."""
    return limit(safe_concat_name(cluster_name, *MANAGED_FRAGMENTS), name_limit)


def bundle_name(cluster_name: str, prefix: str = "mcc-", name_limit: int = 48) -> str:
    """Name under which the deployment system stores the chart's bundle."""
    return f"{prefix}{managed_chart_name(cluster_name, name_limit)}"

