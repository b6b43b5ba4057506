"""
Helpers to read harvest bags: {tool: {tool_version: tool_output}}.
"""

from typing import Any, Iterable, Optional

from packaging.version import InvalidVersion, Version


def _normalize_version(version) -> Optional[Version]:
    # '1' is how some tools report 1.0.0
    if str(version) == "1":
        return Version("1.0.0")
    try:
        normalized = Version(str(version))
    except InvalidVersion:
        return None
    # only MAJOR.MINOR.PATCH, '2.0' and '1.2.3.4' are not semver
    if normalized.epoch or len(normalized.release) != 3:
        return None
    return normalized


def get_latest_version(versions):
    """
    Returns the greatest version in the list.

    Invalid and pre-release versions never win; when nothing is valid the
    first entry is returned. Non-list input is returned unchanged.
    """
    if not isinstance(versions, list):
        return versions
    if not versions:
        return None
    if len(versions) == 1:
        return versions[0]
    latest = versions[0]
    latest_normalized = _normalize_version(latest)
    for current in versions[1:]:
        normalized = _normalize_version(current)
        if normalized is None or normalized.is_prerelease:
            continue
        if latest_normalized is None or normalized > latest_normalized:
            latest, latest_normalized = current, normalized
    return latest


def get_latest_tool_harvest(harvest: Optional[dict], tool: str) -> Any:
    """
    Returns the output of the latest version of `tool` in the harvest bag, or None.
    """
    if not harvest or not harvest.get(tool):
        return None
    latest_version = get_latest_version(list(harvest[tool].keys()))
    return harvest[tool].get(latest_version)


def get_path(obj: Any, path) -> Any:
    """
    Reads a nested value by dotted path ('registryData.manifest.license') or
    list of keys. Integer segments index into lists. Returns None when any step
    is missing.
    """
    segments: Iterable = path.split(".") if isinstance(path, str) else path
    current = obj
    for segment in segments:
        if isinstance(current, dict):
            current = current.get(segment)
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None
        if current is None:
            return None
    return current
