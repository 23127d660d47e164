"""
Version Policy Module for the zoipack tools.

Pure functions that parse semantic versions, compute the next version for a
bump and map the `prod`/`dev` tokens to release tracks and branch labels.
"""

import re
from enum import Enum
from typing import NamedTuple, Optional

from zoipack.errors import (
    InvalidBranchToken,
    InvalidBumpPart,
    InvalidTrack,
    InvalidVersionFormat,
)

_NUMERIC = r"0|[1-9]\d*"
_PRERELEASE_ID = r"0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*"
SEMVER_PATTERN = re.compile(
    rf"(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>(?:{_PRERELEASE_ID})(?:\.(?:{_PRERELEASE_ID}))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)

BUMP_PARTS = ("major", "minor", "patch")


class SemVer(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    def __str__(self):
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    @property
    def core(self):
        return (self.major, self.minor, self.patch)

    def precedence_key(self):
        """
        Sort key implementing semver precedence; build metadata is ignored.

        A release sorts above any of its pre-releases, numeric identifiers sort
        numerically and below alphanumeric ones.
        """
        if not self.prerelease:
            return (self.core, 1, ())
        identifiers = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease.split(".")
        )
        return (self.core, 0, identifiers)


class Track(Enum):
    """The two independent release lines."""

    PROD = "prod"
    DEV = "dev"

    @property
    def json_key(self):
        return "production" if self is Track.PROD else "development"

    @property
    def branch_name(self):
        return "Production" if self is Track.PROD else "Development"

    @property
    def tag_prefix(self):
        return "Prod" if self is Track.PROD else "Dev"


class VersionState(NamedTuple):
    number: SemVer
    status: str
    branch: Optional[str]


def validate(text):
    """
    Parse a strict `x.y.z` version with optional pre-release and build metadata.

    Args:
        text (str): Candidate version string.

    Returns:
        SemVer: The parsed version.

    Raises:
        InvalidVersionFormat: If the text is not a valid semantic version.
    """
    match = SEMVER_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if not match:
        raise InvalidVersionFormat(
            f"Invalid version number format: '{text}'. Must be 'x.y.z'."
        )
    return SemVer(
        int(match.group("major")),
        int(match.group("minor")),
        int(match.group("patch")),
        match.group("prerelease"),
        match.group("build"),
    )


def next_version(current, part):
    """
    Increment a version by one semantic-versioning component.

    A pre-release is promoted to its release where that is already the next
    version in the requested part (``1.2.3-beta`` patch-bumps to ``1.2.3``).
    Pre-release and build metadata are dropped from the result.

    Args:
        current (str | SemVer): Version to increment.
        part (str): One of ``major``, ``minor`` or ``patch``.

    Returns:
        SemVer: The incremented version.
    """
    if part not in BUMP_PARTS:
        raise InvalidBumpPart(
            f"Invalid part to bump: '{part}'. Must be 'major', 'minor', or 'patch'."
        )
    version = current if isinstance(current, SemVer) else validate(current)
    major, minor, patch = version.core
    pre = bool(version.prerelease)

    if part == "major":
        if pre and minor == 0 and patch == 0:
            return SemVer(major, 0, 0)
        return SemVer(major + 1, 0, 0)
    if part == "minor":
        if pre and patch == 0:
            return SemVer(major, minor, 0)
        return SemVer(major, minor + 1, 0)
    if pre:
        return SemVer(major, minor, patch)
    return SemVer(major, minor, patch + 1)


def resolve_track(token):
    try:
        return Track(token)
    except ValueError:
        raise InvalidTrack(
            f"Invalid environment type: '{token}'. Must be 'prod' or 'dev'."
        ) from None


def resolve_branch(token):
    """Map a `dev`/`prod` token to the branch label stored in the constants file."""
    if token not in (Track.PROD.value, Track.DEV.value):
        raise InvalidBranchToken(
            f"Invalid branch type: '{token}'. Must be 'dev' or 'prod'."
        )
    return Track(token).branch_name
