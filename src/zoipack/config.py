# src/zoipack/config.py
"""Configuration settings for the zoipack tools."""

import os
from pathlib import Path

# Release artifacts, relative to the project root
CARGO_FILE = Path("Cargo.toml")
CONSTANTS_FILE = Path("src/main.rs")
VERSION_JSON_FILE = Path("app/version.json")
FORMULA_FILE = Path("packages/brew/zoi.rb")

# Installer Configuration
BINARY_NAME = "zoi"
INSTALL_BASE_URL = "https://gitlab.com/Zillowe/Zillwen/Zusty/Zoi/-/raw/main/app"
POSIX_SCRIPT_NAME = "install.sh"
POWERSHELL_SCRIPT_NAME = "install.ps1"
DOWNLOAD_CHUNK_SIZE = 8192

# Logging Configuration
LOG_LEVEL = "INFO"  # e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL

# Platform keys used in the Homebrew formula download names (zoi-<key>.tar.zst)
FORMULA_PLATFORMS = ["macos-arm64", "macos-amd64", "linux-amd64", "linux-arm64"]


def cargo_file():
    return Path(os.getenv("ZOI_CARGO_FILE") or CARGO_FILE)


def constants_file():
    return Path(os.getenv("ZOI_CONSTANTS_FILE") or CONSTANTS_FILE)


def version_json_file():
    return Path(os.getenv("ZOI_VERSION_JSON_FILE") or VERSION_JSON_FILE)


def formula_file():
    return Path(os.getenv("ZOI_FORMULA_FILE") or FORMULA_FILE)


def binary_name():
    return os.getenv("ZOI_BINARY_NAME") or BINARY_NAME


def install_base_url():
    return (os.getenv("ZOI_INSTALL_BASE_URL") or INSTALL_BASE_URL).rstrip("/")


def download_timeout():
    """
    Seconds to wait on the installer download, or None to wait indefinitely.

    Unset, empty or non-positive values mean no timeout.
    """
    raw = os.getenv("ZOI_DOWNLOAD_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        return None
    return timeout if timeout > 0 else None


def log_level():
    return (os.getenv("ZOI_LOG_LEVEL") or LOG_LEVEL).upper()
