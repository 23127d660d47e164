"""Naming rules for the Homebrew formula's version, release tag and checksums."""

import re
from typing import Dict, List

from zoipack import config
from zoipack.errors import InvalidChecksum, InvalidPlatformKey

SHA512_PATTERN = re.compile(r"[0-9a-fA-F]{128}")


def formula_version(version, status):
    """`3.2.5` with status `Beta` becomes `3.2.5-beta`."""
    return f"{version}-" + "-".join(status.lower().split())


def release_tag(track, status, version):
    """`Prod-Beta-3.2.5`: the tag the formula's download URLs are built from."""
    words = "-".join(word[:1].upper() + word[1:] for word in status.split())
    return f"{track.tag_prefix}-{words}-{version}"


def parse_checksums(pairs: List[str]) -> Dict[str, str]:
    """
    Parse `PLATFORM=SHA512` pairs given on the command line.

    Raises:
        InvalidPlatformKey: For a platform the formula does not ship.
        InvalidChecksum: For a value that is not a hex sha512 digest.
    """
    checksums = {}
    for pair in pairs or []:
        platform, sep, digest = pair.partition("=")
        platform = platform.strip()
        digest = digest.strip()
        if not sep or platform not in config.FORMULA_PLATFORMS:
            raise InvalidPlatformKey(
                f"Invalid checksum platform in '{pair}'. "
                f"Must be one of: {', '.join(config.FORMULA_PLATFORMS)}."
            )
        if not SHA512_PATTERN.fullmatch(digest):
            raise InvalidChecksum(
                f"Invalid sha512 for '{platform}': expected 128 hexadecimal characters."
            )
        checksums[platform] = digest.lower()
    return checksums
