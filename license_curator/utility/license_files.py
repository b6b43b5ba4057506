"""
Recognizes license files in a component's file list.

A license file is a well-known name (LICENSE, COPYING, NOTICE...) either at the
root of the component or directly inside the folder where the component's
ecosystem unpacks its sources (e.g. 'package/' for npm tarballs).
"""

from typing import List, Optional
from urllib.parse import unquote

_LICENSE_FILE_STEMS = ["license", "licence", "copying", "copyright", "notice", "unlicense"]
_LICENSE_FILE_EXTENSIONS = ["", ".md", ".txt", ".html", ".rst"]

LICENSE_FILE_NAMES = frozenset(stem + ext for stem in _LICENSE_FILE_STEMS for ext in _LICENSE_FILE_EXTENSIONS)


def _coordinate(coordinates, name: str) -> Optional[str]:
    if coordinates is None:
        return None
    if isinstance(coordinates, dict):
        return coordinates.get(name)
    return getattr(coordinates, name, None)


def get_license_locations(coordinates) -> List[str]:
    """
    Returns the folders (lowercase, with trailing '/') where the ecosystem of
    `coordinates` keeps the component's license files, besides the root.
    """
    component_type = _coordinate(coordinates, "type")
    name = _coordinate(coordinates, "name")
    revision = _coordinate(coordinates, "revision")

    if component_type == "npm":
        return ["package/"]
    if component_type == "maven":
        return ["meta-inf/"]
    if component_type == "pypi" and name and revision:
        return [f"{name}-{revision}/".lower()]
    if component_type == "go" and name and revision:
        namespace = unquote(_coordinate(coordinates, "namespace") or "")
        prefix = f"{namespace}/" if namespace and namespace != "-" else ""
        return [f"{prefix}{name}@{revision}/".lower()]
    return []


def is_license_file(file_path: Optional[str], coordinates=None) -> bool:
    """
    True if `file_path` names a license file for the component at `coordinates`.

    Args:
        file_path (str): path of the file inside the component.
        coordinates: dict or object with `type`, `namespace`, `name`, `revision`.
    """
    if not file_path:
        return False
    lowered = file_path.lower()
    if lowered in LICENSE_FILE_NAMES:
        return True
    for location in get_license_locations(coordinates):
        if lowered.startswith(location) and lowered[len(location):] in LICENSE_FILE_NAMES:
            return True
    return False
