"""
Manifest Store Module for the zoipack tools.

This module owns all file I/O on the release artifacts. Artifacts are read into a
ReleaseState at the start of an invocation, transformed in memory and written back
in a fixed order at the end.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from zoipack import config
from zoipack.errors import MalformedJson, MissingFile

logger = logging.getLogger(__name__)

MANIFEST_VERSION_PATTERN = re.compile(r'^version = ".*"', re.MULTILINE)
CONSTANT_PATTERNS = {
    "BRANCH": re.compile(r'const BRANCH: &str = "(.*)"'),
    "STATUS": re.compile(r'const STATUS: &str = "(.*)"'),
    "NUMBER": re.compile(r'const NUMBER: &str = "(.*)"'),
}
FORMULA_VERSION_PATTERN = re.compile(r'^(\s*)version ".*"', re.MULTILINE)
FORMULA_TAG_PATTERN = re.compile(r'^(\s*)_tag = ".*"', re.MULTILINE)
JSON_TRACK_KEYS = ("production", "development")


class Artifact(Enum):
    """Release artifacts in the order they are written back."""

    MANIFEST = "manifest"
    CONSTANTS = "constants"
    VERSION_JSON = "version_json"
    FORMULA = "formula"


@dataclass
class ReleaseState:
    """In-memory copy of the release artifacts for a single invocation."""

    texts: Dict[Artifact, str] = field(default_factory=dict)
    version_json: Optional[dict] = None
    original: Dict[Artifact, str] = field(default_factory=dict)
    unmatched: List[str] = field(default_factory=list)

    def track(self, json_key):
        return self.version_json["latest"][json_key]


class ManifestStore:
    """
    Reads, transforms and writes the release artifacts below a project root.
    """

    def __init__(self, root="."):
        """
        Initialize the store.

        Args:
            root (str | Path): Project root that artifact paths are relative to.
        """
        self.root = Path(root)
        self.paths = {
            Artifact.MANIFEST: config.cargo_file(),
            Artifact.CONSTANTS: config.constants_file(),
            Artifact.VERSION_JSON: config.version_json_file(),
            Artifact.FORMULA: config.formula_file(),
        }

    def path_for(self, artifact):
        return self.root / self.paths[artifact]

    def load(self, *artifacts):
        """
        Read the requested artifacts into a fresh ReleaseState.

        Args:
            *artifacts (Artifact): Artifacts the invocation will touch.

        Returns:
            ReleaseState: The loaded state.

        Raises:
            MissingFile: If an artifact does not exist.
            MalformedJson: If the version status file cannot be parsed.
        """
        state = ReleaseState()
        for artifact in artifacts:
            text = self._read_text(artifact)
            state.original[artifact] = text
            if artifact is Artifact.VERSION_JSON:
                state.version_json = self._parse_version_json(text)
            else:
                state.texts[artifact] = text
        return state

    def save(self, state):
        """
        Write back every loaded artifact whose content changed.

        Returns:
            List[Path]: Paths that were rewritten.
        """
        written = []
        for artifact in Artifact:
            if artifact not in state.original:
                continue
            if artifact is Artifact.VERSION_JSON:
                content = self.dump_version_json(state.version_json)
            else:
                content = state.texts[artifact]
            if content == state.original[artifact]:
                logger.debug("No changes for %s", self.path_for(artifact))
                continue
            path = self.path_for(artifact)
            path.write_text(content, encoding="utf-8")
            state.original[artifact] = content
            written.append(path)
            logger.info("Updated %s", path)
        return written

    def _read_text(self, artifact):
        path = self.path_for(artifact)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise MissingFile(f"Required file not found: {path}") from None

    def _parse_version_json(self, text):
        path = self.path_for(Artifact.VERSION_JSON)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedJson(f"Could not parse {path}: {e}") from e
        latest = data.get("latest") if isinstance(data, dict) else None
        if not isinstance(latest, dict) or not all(
            isinstance(latest.get(key), dict) for key in JSON_TRACK_KEYS
        ):
            raise MalformedJson(
                f"{path} must contain 'latest.production' and 'latest.development' objects"
            )
        for key in JSON_TRACK_KEYS:
            for name in ("version", "status"):
                if not isinstance(latest[key].get(name), str):
                    raise MalformedJson(f"{path}: 'latest.{key}.{name}' must be a string")
        return data

    @staticmethod
    def dump_version_json(data):
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def _substitute(self, state, artifact, pattern, replacement, label):
        """
        Replace the first match of `pattern` in an artifact's text.

        An artifact without a matching declaration is left unchanged; the miss is
        logged and recorded on the state instead of raising.
        """
        content, count = pattern.subn(replacement, state.texts[artifact], count=1)
        if not count:
            path = self.path_for(artifact)
            logger.warning("No %s declaration found in %s; left unchanged", label, path)
            state.unmatched.append(f"{path}: {label}")
            return False
        state.texts[artifact] = content
        return True

    def set_manifest_version(self, state, version_string):
        """Set the top-level `version = "..."` line of the Cargo manifest."""
        return self._substitute(
            state,
            Artifact.MANIFEST,
            MANIFEST_VERSION_PATTERN,
            lambda m: f'version = "{version_string}"',
            "version",
        )

    def set_constants(self, state, branch=None, status=None, number=None):
        """
        Set any of the BRANCH, STATUS and NUMBER source constants.

        Returns:
            bool: True if every requested constant was found.
        """
        found = True
        for name, value in (("BRANCH", branch), ("STATUS", status), ("NUMBER", number)):
            if value is None:
                continue
            found &= self._substitute(
                state,
                Artifact.CONSTANTS,
                CONSTANT_PATTERNS[name],
                lambda m, name=name, value=value: f'const {name}: &str = "{value}"',
                f"const {name}",
            )
        return found

    def get_constant(self, state, name):
        """Return the string literal assigned to a source constant, or None."""
        match = CONSTANT_PATTERNS[name].search(state.texts[Artifact.CONSTANTS])
        return match.group(1) if match else None

    def set_track_fields(self, state, json_key, version=None, status=None):
        track = state.track(json_key)
        if version is not None:
            track["version"] = version
        if status is not None:
            track["status"] = status
        logger.debug("Set %s data in %s", json_key, self.path_for(Artifact.VERSION_JSON))

    def set_formula_release(self, state, version_string, tag):
        """Set the formula's `version "..."` and `_tag = "..."` lines."""
        found = self._substitute(
            state,
            Artifact.FORMULA,
            FORMULA_VERSION_PATTERN,
            lambda m: f'{m.group(1)}version "{version_string}"',
            "version",
        )
        found &= self._substitute(
            state,
            Artifact.FORMULA,
            FORMULA_TAG_PATTERN,
            lambda m: f'{m.group(1)}_tag = "{tag}"',
            "_tag",
        )
        return found

    def set_formula_checksum(self, state, platform, checksum):
        """Set the sha512 that follows the `zoi-<platform>.tar.zst` download URL."""
        pattern = re.compile(
            rf'(zoi-{re.escape(platform)}\.tar\.zst"\s*\n\s*sha512 ")[0-9a-fA-F]*(")'
        )
        return self._substitute(
            state,
            Artifact.FORMULA,
            pattern,
            lambda m: f"{m.group(1)}{checksum}{m.group(2)}",
            f"sha512 for {platform}",
        )
