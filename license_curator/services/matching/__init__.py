"""
Package `license_curator.services.matching`

Cross-revision license matching: decides whether a newly harvested revision of
a component can inherit the license curated for another revision.

Public API:
- LicenseMatcher(policies=None).process(source, target) -> dict
- DefinitionLicenseMatchPolicy, HarvestLicenseMatchPolicy
- HarvestStrategy, get_strategy(component_type)
"""

from .matcher import LicenseMatcher
from .policies import DefinitionLicenseMatchPolicy, HarvestLicenseMatchPolicy, LicenseMatchPolicy
from .strategies import HarvestStrategy, get_strategy

__all__ = [
    "DefinitionLicenseMatchPolicy",
    "HarvestLicenseMatchPolicy",
    "HarvestStrategy",
    "LicenseMatchPolicy",
    "LicenseMatcher",
    "get_strategy",
]
