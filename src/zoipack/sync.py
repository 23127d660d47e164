"""
Sync Orchestrator Module for the zoipack tools.

This module applies `bump`, `set` and `formula` commands across the release
artifacts so that they describe the same version state.
"""

import logging

from zoipack.errors import InvalidBumpPart, MissingArgument, UnknownSetKey
from zoipack.formula import formula_version, parse_checksums, release_tag
from zoipack.manifest_store import Artifact, ManifestStore
from zoipack.version_policy import (
    BUMP_PARTS,
    VersionState,
    next_version,
    resolve_branch,
    resolve_track,
    validate,
)

SET_KEYS = ("branch", "status", "number")


class SyncOrchestrator:
    """
    Coordinates version changes across the Cargo manifest, source constants,
    version status file and Homebrew formula.
    """

    def __init__(self, store: ManifestStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    def current_state(self, track_token):
        """
        Read the VersionState of a track from the status file and constants.

        The branch is the one recorded in the constants file, if any.
        """
        track = resolve_track(track_token)
        state = self.store.load(Artifact.VERSION_JSON, Artifact.CONSTANTS)
        data = state.track(track.json_key)
        branch = self.store.get_constant(state, "BRANCH")
        return VersionState(validate(data["version"]), data["status"], branch)

    def bump(self, track_token, part):
        """
        Increment a track's version and propagate it.

        Writes the manifest as `<version>-<status>-<track>`, the bare version to the
        NUMBER constant and the track's version in the status file.

        Returns:
            str: The new version.
        """
        track = resolve_track(track_token)
        if part not in BUMP_PARTS:
            raise InvalidBumpPart(
                f"Invalid part to bump: '{part}'. Must be 'major', 'minor', or 'patch'."
            )

        state = self.store.load(Artifact.MANIFEST, Artifact.CONSTANTS, Artifact.VERSION_JSON)
        track_data = state.track(track.json_key)
        current_version = track_data["version"]
        current_status = track_data["status"]
        self.logger.info(f"Current version for '{track.json_key}': {current_version}")

        new_version = str(next_version(current_version, part))
        self.logger.info(f"Bumping '{part}' for '{track.json_key}'. New version: {new_version}")

        manifest_version = f"{new_version}-{current_status.lower()}-{track.value}"
        self.store.set_manifest_version(state, manifest_version)
        self.store.set_constants(state, number=new_version)
        self.store.set_track_fields(state, track.json_key, version=new_version)
        self.store.save(state)

        self.logger.info(f"Manifest version is now {manifest_version}")
        self._report(state)
        return new_version

    def set_value(self, key, value):
        """
        Set the branch, status or bare version number.

        `branch` and `number` only touch the source constants; `status` is also
        written to both tracks of the status file.
        """
        if key not in SET_KEYS:
            raise UnknownSetKey(
                f"Unknown 'set' key: '{key}'. Must be 'branch', 'status', or 'number'."
            )
        if not value:
            raise MissingArgument("'set' command requires a key and a value.")

        if key == "branch":
            branch = resolve_branch(value)
            state = self.store.load(Artifact.CONSTANTS)
            self.logger.info(f"Setting branch to: {branch}")
            self.store.set_constants(state, branch=branch)
        elif key == "status":
            state = self.store.load(Artifact.CONSTANTS, Artifact.VERSION_JSON)
            self.logger.info(f"Setting status to: {value}")
            self.store.set_constants(state, status=value)
            for json_key in ("production", "development"):
                self.store.set_track_fields(state, json_key, status=value)
        else:
            number = str(validate(value))
            state = self.store.load(Artifact.CONSTANTS)
            self.logger.info(f"Setting version number to: {number}")
            self.store.set_constants(state, number=number)

        self.store.save(state)
        self._report(state)
        return state

    def formula(self, track_token, checksum_pairs=None):
        """
        Point the Homebrew formula at a track's current release.

        Args:
            track_token (str): `prod` or `dev`.
            checksum_pairs (List[str]): Optional `PLATFORM=SHA512` pairs.

        Returns:
            str: The release tag written to the formula.
        """
        track = resolve_track(track_token)
        checksums = parse_checksums(checksum_pairs)

        state = self.store.load(Artifact.VERSION_JSON, Artifact.FORMULA)
        track_data = state.track(track.json_key)
        version = str(validate(track_data["version"]))
        status = track_data["status"]

        tag = release_tag(track, status, version)
        self.logger.info(f"Setting formula release to {tag}")
        self.store.set_formula_release(state, formula_version(version, status), tag)
        for platform, digest in checksums.items():
            self.store.set_formula_checksum(state, platform, digest)

        self.store.save(state)
        self._report(state)
        return tag

    def _report(self, state):
        if state.unmatched:
            self.logger.warning(
                "Finished with %d declaration(s) not found; those files were left as-is.",
                len(state.unmatched),
            )
        else:
            self.logger.info("All files updated successfully.")
