"""
Module `identifiers` — canonical SPDX identifier tables.

The tables are built once at import from two sources:
- `spdx_licenses.json`, bundled in this package (SPDX license-list-data layout),
  which also carries deprecated identifiers (e.g. 'GPL-2.0') and full names;
- the SPDX keys known to `license_expression`; its aliases are kept only when
  they are listed SPDX identifiers.

Lookups are case-insensitive and return the canonical spelling, e.g.
'apache-2.0' -> 'Apache-2.0'. The tables are read-only after import.
"""

import json
import logging
import os
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from license_expression import get_spdx_licensing

from license_curator.core.config import SPDX_LICENSES_PATH
from .nodes import NOASSERTION

logger = logging.getLogger(__name__)

_SPDX_LICENSES_JSON = SPDX_LICENSES_PATH or os.path.join(os.path.dirname(__file__), "spdx_licenses.json")


def _read_license_list() -> dict:
    """
    Reads the bundled license list. Returns an empty dict when the file is
    missing or unreadable so the tables still get the license_expression symbols.
    """
    try:
        with open(_SPDX_LICENSES_JSON, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("SPDX license list not found at %s", _SPDX_LICENSES_JSON)
    except (OSError, ValueError):
        logger.exception("Error reading the SPDX license list %s", _SPDX_LICENSES_JSON)
    return {}


def _build_tables() -> Tuple[Mapping[str, str], Mapping[str, str], Mapping[str, str]]:
    """
    Builds the {lowercase id: id}, {lowercase exception: exception} and
    {lowercase name: id} tables.
    """
    licenses = {NOASSERTION.lower(): NOASSERTION}
    exceptions = {}
    names = {}

    data = _read_license_list()
    entries = [e for e in data.get("licenses", []) if isinstance(e, dict) and e.get("licenseId")]
    for entry in entries:
        licenses.setdefault(entry["licenseId"].lower(), entry["licenseId"])
    # current identifiers win over deprecated ones sharing the same full name
    for entry in sorted(entries, key=lambda e: bool(e.get("isDeprecatedLicenseId"))):
        if entry.get("name"):
            names.setdefault(entry["name"].lower().strip(), entry["licenseId"])
    for entry in data.get("exceptions", []):
        if isinstance(entry, dict) and entry.get("licenseExceptionId"):
            exceptions.setdefault(entry["licenseExceptionId"].lower(), entry["licenseExceptionId"])

    listed = set(licenses) | set(exceptions)
    for symbol in get_spdx_licensing().known_symbols.values():
        target = exceptions if symbol.is_exception else licenses
        for identifier in (symbol.key, *symbol.aliases):
            # '+' is parsed as a modifier, LicenseRef- keys are not SPDX identifiers
            if not identifier or identifier.endswith("+") or identifier.startswith("LicenseRef-"):
                continue
            # aliases also carry ScanCode short names ('GPL', 'BSD-2')
            if identifier != symbol.key and identifier.lower() not in listed:
                continue
            target.setdefault(identifier.lower(), identifier)

    logger.debug("Loaded %d license ids, %d exceptions, %d names", len(licenses), len(exceptions), len(names))
    return MappingProxyType(licenses), MappingProxyType(exceptions), MappingProxyType(names)


# built once
LOWER_LICENSE_MAP, LOWER_EXCEPTION_MAP, LOWER_NAME_MAP = _build_tables()


def normalize_single(license: Optional[str]) -> Optional[str]:
    """
    Normalizes a single SPDX identifier, e.g. 'mit' -> 'MIT'.
    Returns None for empty or unknown identifiers.
    """
    if not license:
        return None
    return LOWER_LICENSE_MAP.get(license.lower().strip())


def normalize_exception(exception: Optional[str]) -> Optional[str]:
    """
    Normalizes an exception identifier; unknown exceptions are returned trimmed.
    """
    if not exception:
        return None
    cleaned = exception.strip()
    return LOWER_EXCEPTION_MAP.get(cleaned.lower(), cleaned)


def lookup_by_name(license_name: Optional[str]) -> Optional[str]:
    """
    Given the full name of a license returns its SPDX identifier.
    Example: 'Common Public License 1.0' -> 'CPL-1.0'. Case insensitive.
    """
    if not license_name:
        return None
    return LOWER_NAME_MAP.get(license_name.lower().strip())
