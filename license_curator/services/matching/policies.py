"""
Module `policies` — comparators run by the LicenseMatcher.

Each policy compares a source and a target revision, both shaped as
{"definition": {...}, "harvest": {...}}, and returns
{"match": [...], "mismatch": [...]} evidence items:

- match:    {"policy", "file"?, "propPath", "value"}
- mismatch: {"policy", "file"?, "propPath", "source", "target"}

A property that is empty on both sides produces no evidence at all.
"""

from typing import Dict, List, Optional, Protocol

from license_curator.utility.harvest import get_path
from license_curator.utility.license_files import is_license_file
from .strategies import HarvestStrategy, get_strategy


class LicenseMatchPolicy(Protocol):
    name: str

    def compare(self, source: dict, target: dict) -> dict:
        ...


class DefinitionLicenseMatchPolicy:
    """
    Compares the license files of two definitions by identity (hashes and
    token), not by their detected license.

    Files are paired by path. Each of sha1, sha256 and token is a separate
    point of comparison, so a file whose content is unchanged keeps matching
    hashes even if other points differ.
    """

    name = "definition"
    compare_props = ("hashes.sha1", "hashes.sha256", "token")

    def compare(self, source: dict, target: dict) -> dict:
        file_map = self._generate_file_map(source, target)
        return self._compare_file_map(file_map)

    def _generate_file_map(self, source: dict, target: dict) -> Dict[str, dict]:
        file_map: Dict[str, dict] = {}
        self._add_files_to_map(file_map, self._get_license_files(source.get("definition")), "sourceFile")
        self._add_files_to_map(file_map, self._get_license_files(target.get("definition")), "targetFile")
        self._pair_renamed_files(file_map)
        return file_map

    @staticmethod
    def _add_files_to_map(file_map: Dict[str, dict], files: Optional[List[dict]], prop_name: str) -> None:
        for f in files or []:
            path = f.get("path")
            if not path:
                continue
            file_map.setdefault(path, {})[prop_name] = f

    def _pair_renamed_files(self, file_map: Dict[str, dict]) -> None:
        """
        Pairs a source-only file with a target-only file holding the same
        content (any equal hash or token); the pair is kept under the source path.
        """
        target_only = [path for path, pair in file_map.items() if "sourceFile" not in pair]
        for path, pair in list(file_map.items()):
            if "targetFile" in pair:
                continue
            for target_path in target_only:
                if target_path not in file_map:
                    continue
                if self._same_content(pair["sourceFile"], file_map[target_path]["targetFile"]):
                    pair["targetFile"] = file_map.pop(target_path)["targetFile"]
                    break

    def _same_content(self, source_file: dict, target_file: dict) -> bool:
        for prop_path in self.compare_props:
            value = get_path(source_file, prop_path)
            if value and value == get_path(target_file, prop_path):
                return True
        return False

    @staticmethod
    def _get_license_files(definition: Optional[dict]) -> List[dict]:
        if not definition:
            return []
        coordinates = definition.get("coordinates")
        return [f for f in definition.get("files") or [] if isinstance(f, dict) and is_license_file(f.get("path"), coordinates)]

    def _compare_file_map(self, file_map: Dict[str, dict]) -> dict:
        result = {"match": [], "mismatch": []}
        for path, pair in file_map.items():
            source_file = pair.get("sourceFile")
            target_file = pair.get("targetFile")
            for prop_path in self.compare_props:
                source_value = get_path(source_file, prop_path)
                target_value = get_path(target_file, prop_path)
                if not source_value and not target_value:
                    continue
                if source_value == target_value:
                    result["match"].append({
                        "policy": self.name,
                        "file": path,
                        "propPath": prop_path,
                        "value": source_value,
                    })
                else:
                    result["mismatch"].append({
                        "policy": self.name,
                        "file": path,
                        "propPath": prop_path,
                        "source": source_value,
                        "target": target_value,
                    })
        return result


class HarvestLicenseMatchPolicy:
    """
    Compares the declared license fields of the harvest data, picking the
    fields from the source component's ecosystem.
    """

    name = "harvest"

    def compare(self, source: dict, target: dict) -> dict:
        coordinates = (source.get("definition") or {}).get("coordinates") or {}
        component_type = coordinates.get("type") if isinstance(coordinates, dict) else getattr(coordinates, "type", None)
        return self._get_strategy(component_type).compare(source, target)

    @staticmethod
    def _get_strategy(component_type: Optional[str]) -> HarvestStrategy:
        return get_strategy(component_type)
