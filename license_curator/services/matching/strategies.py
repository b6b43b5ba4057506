"""
Module `strategies` — per-ecosystem harvest comparison.

A HarvestStrategy names the fields of the harvest tool's output that hold the
declared license of a package in one ecosystem (e.g. npm reads
'registryData.manifest.license'). Unknown ecosystems get the 'default' strategy,
which has no fields and so never produces evidence.

NuGet adds a post-processing step: license URLs hosted on GitHub or pointing to
the deprecated-license-URL placeholder say nothing about the license of a given
revision, so matches on them are dropped.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from license_curator.core import config
from license_curator.utility.harvest import get_latest_tool_harvest, get_path

logger = logging.getLogger(__name__)

NUGET_LICENSE_URL = "manifest.licenseUrl"

MatchFilter = Callable[[List[dict]], List[dict]]


def filter_nuget_license_urls(matches: List[dict]) -> List[dict]:
    """
    Drops matches whose value is a license URL on an excluded host.
    The dropped matches are not turned into mismatches.
    """
    excluded = [url.lower() for url in config.NUGET_EXCLUDED_LICENSE_URLS]
    kept = []
    for match in matches:
        value = match.get("value")
        if match.get("propPath") == NUGET_LICENSE_URL:
            logger.info("NuGet licenseUrl match: %s", value)
        if isinstance(value, str) and any(url in value.lower() for url in excluded):
            continue
        kept.append(match)
    return kept


@dataclass(frozen=True)
class HarvestStrategy:
    """
    Compares the declared-license fields of two harvests of one ecosystem.
    """
    type: str
    prop_paths: Tuple[str, ...] = ()
    match_filter: Optional[MatchFilter] = None
    name: str = "harvest"

    def compare(self, source: dict, target: dict) -> dict:
        source_harvest = get_latest_tool_harvest(source.get("harvest"), config.HARVEST_TOOL)
        target_harvest = get_latest_tool_harvest(target.get("harvest"), config.HARVEST_TOOL)
        result = {"match": [], "mismatch": []}
        for prop_path in self.prop_paths:
            source_license = get_path(source_harvest, prop_path)
            target_license = get_path(target_harvest, prop_path)
            if not source_license and not target_license:
                continue
            if source_license == target_license:
                result["match"].append({
                    "policy": self.name,
                    "propPath": prop_path,
                    "value": source_license,
                })
            else:
                result["mismatch"].append({
                    "policy": self.name,
                    "propPath": prop_path,
                    "source": source_license,
                    "target": target_license,
                })
        if self.match_filter:
            result["match"] = self.match_filter(result["match"])
        return result


_STRATEGIES: Dict[str, HarvestStrategy] = {
    "maven": HarvestStrategy("maven", ("manifest.summary.licenses",)),
    "conda": HarvestStrategy("conda", ("declaredLicenses",)),
    "condasrc": HarvestStrategy("condasrc", ("declaredLicenses",)),
    "crate": HarvestStrategy("crate", ("registryData.license",)),
    "pod": HarvestStrategy("pod", ("registryData.license",)),
    "nuget": HarvestStrategy(
        "nuget", ("manifest.licenseExpression", NUGET_LICENSE_URL), match_filter=filter_nuget_license_urls
    ),
    "npm": HarvestStrategy("npm", ("registryData.manifest.license",)),
    "composer": HarvestStrategy("composer", ("registryData.manifest.license",)),
    "gem": HarvestStrategy("gem", ("registryData.licenses",)),
    "pypi": HarvestStrategy("pypi", ("declaredLicense", "registryData.info.license")),
    "deb": HarvestStrategy("deb", ("declaredLicenses",)),
    "debsrc": HarvestStrategy("debsrc", ("declaredLicenses",)),
}

DEFAULT_STRATEGY = HarvestStrategy("default")


def get_strategy(component_type: Optional[str]) -> HarvestStrategy:
    """
    Returns the strategy for an ecosystem, or the no-evidence default.
    """
    return _STRATEGIES.get(component_type, DEFAULT_STRATEGY)
