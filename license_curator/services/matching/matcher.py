"""
This module provides the LicenseMatcher, which decides whether two revisions
of the same component carry the same license.

Main Responsibility:
- Runs every configured policy over the (source, target) pair.
- Concatenates their match and mismatch evidence.
- Turns the evidence into a verdict. A single mismatch vetoes the match, and
  no evidence at all is inconclusive, which is reported as not matching.
"""

import logging
from typing import List, Optional

from .policies import DefinitionLicenseMatchPolicy, HarvestLicenseMatchPolicy, LicenseMatchPolicy

logger = logging.getLogger(__name__)


class LicenseMatcher:
    """
    Given two coordinates with different revisions, decides whether they have
    the same license.
    """

    def __init__(self, policies: Optional[List[LicenseMatchPolicy]] = None):
        self._policies = policies or [DefinitionLicenseMatchPolicy(), HarvestLicenseMatchPolicy()]

    def process(self, source: dict, target: dict) -> dict:
        """
        Compares the source and target revisions.

        Args:
            source (dict): {"definition": ..., "harvest": ...} of the source revision.
            target (dict): same shape, for the revision being compared.

        Returns:
            dict: {"isMatching": True, "match": [...]} or
                  {"isMatching": False, "mismatch": [...]}; the mismatch list is
                  empty when no policy found any evidence.
        """
        match: List[dict] = []
        mismatch: List[dict] = []
        for policy in self._policies:
            result = policy.compare(source, target)
            match.extend(result.get("match", []))
            mismatch.extend(result.get("mismatch", []))

        if mismatch or not match:
            logger.debug("License mismatch: %d mismatches, %d matches", len(mismatch), len(match))
            return {"isMatching": False, "mismatch": mismatch}
        logger.debug("License match: %d matches", len(match))
        return {"isMatching": True, "match": match}
