"""
Installer Module for the zoipack tools.

This module makes sure the `zoi` binary is available, downloading and running the
platform's install script when it is not.
"""

import logging
import os
import subprocess
import sys
import tempfile
from enum import Enum
from pathlib import Path
from typing import List, NamedTuple

import requests

from zoipack import config
from zoipack.errors import DownloadFailed, InstallerExecFailed, UnsupportedPlatform


class Platform(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    UNSUPPORTED = "unsupported"

    @classmethod
    def detect(cls, platform_name=None):
        """Map a `sys.platform` value onto one of the supported platforms."""
        name = platform_name if platform_name is not None else sys.platform
        if name == "win32":
            return cls.WINDOWS
        if name.startswith("linux"):
            return cls.LINUX
        if name == "darwin":
            return cls.MACOS
        return cls.UNSUPPORTED


class InstallScript(NamedTuple):
    url: str
    script_name: str
    shell: str
    shell_args: List[str]

    def command(self, script_path):
        return [self.shell, *self.shell_args, str(script_path)]


def select_script(platform, base_url=None, platform_name=None):
    """
    Choose the install script and the shell that runs it.

    Raises:
        UnsupportedPlatform: For any platform other than Windows, Linux or macOS.
    """
    base_url = base_url or config.install_base_url()
    if platform is Platform.WINDOWS:
        return InstallScript(
            url=f"{base_url}/{config.POWERSHELL_SCRIPT_NAME}",
            script_name=config.POWERSHELL_SCRIPT_NAME,
            shell="powershell.exe",
            shell_args=["-ExecutionPolicy", "Bypass", "-File"],
        )
    if platform in (Platform.LINUX, Platform.MACOS):
        return InstallScript(
            url=f"{base_url}/{config.POSIX_SCRIPT_NAME}",
            script_name=config.POSIX_SCRIPT_NAME,
            shell="bash",
            shell_args=[],
        )
    raise UnsupportedPlatform(f"Unsupported platform: {platform_name or platform.value}")


class Installer:
    """
    Runs the presence check, download and execution steps of the bootstrap.
    """

    def __init__(self, platform=None, binary_name=None, timeout=None):
        """
        Initialize the installer.

        Args:
            platform (Platform): Host platform; detected when omitted.
            binary_name (str): Binary to look for on PATH.
            timeout (float | None): Download timeout in seconds, None to wait forever.
        """
        self.platform = platform or Platform.detect()
        self.platform_name = platform.value if platform else sys.platform
        self.binary_name = binary_name or config.binary_name()
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def is_installed(self):
        """
        Check whether the binary is on PATH using `where` or `which`.

        A failed lookup and a missing lookup tool both count as not installed.
        """
        lookup = "where" if self.platform is Platform.WINDOWS else "which"
        try:
            result = subprocess.run(
                [lookup, self.binary_name], capture_output=True, text=True
            )
        except OSError as e:
            self.logger.debug(f"'{lookup}' could not be run: {e}")
            return False
        if result.returncode != 0:
            return False
        self.logger.debug(f"{self.binary_name} found at: {result.stdout.strip()}")
        return True

    def download(self, url, destination):
        """
        Stream the install script to `destination`.

        Raises:
            DownloadFailed: On a network error, a non-success response or an empty body.
        """
        self.logger.info(f"Downloading {self.binary_name} installer from {url}...")
        try:
            with requests.get(url, stream=True, timeout=self.timeout) as response:
                if not response.ok:
                    raise DownloadFailed(
                        f"Failed to download script: {response.status_code} {response.reason}"
                    )
                written = 0
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=config.DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            written += len(chunk)
        except requests.RequestException as e:
            raise DownloadFailed(f"Failed to download script: {e}") from e

        if not written:
            raise DownloadFailed("Failed to download script: response body was empty")
        self.logger.info(f"Downloaded installer to {destination}")
        return destination

    def execute(self, command):
        """
        Run the installer with inherited standard streams.

        Returns:
            int: The child's exit code, or 1 when it was killed by a signal.

        Raises:
            InstallerExecFailed: If the shell could not be started.
        """
        self.logger.info(f"Running installer with: {' '.join(command)}")
        try:
            completed = subprocess.run(command)
        except OSError as e:
            raise InstallerExecFailed(f"Failed to start installer: {e}") from e

        code = completed.returncode
        if code is None or code < 0:
            code = 1
        if code != 0:
            self.logger.error(f"Installer exited with code {code}")
        else:
            self.logger.info("Installation completed successfully.")
        return code

    def install(self):
        """Download and run the platform's install script; return its exit code."""
        script = select_script(self.platform, platform_name=self.platform_name)
        script_path = Path(tempfile.gettempdir()) / script.script_name

        self.download(script.url, script_path)
        if self.platform is not Platform.WINDOWS:
            os.chmod(script_path, 0o755)

        return self.execute(script.command(script_path))

    def run(self):
        """
        Install the binary unless it is already present.

        Returns:
            int: Process exit code for the bootstrap.
        """
        if self.is_installed():
            self.logger.info(
                f"{self.binary_name} is already installed. To upgrade, run '{self.binary_name} upgrade'."
            )
            return 0
        self.logger.info(f"{self.binary_name} not found, starting installation.")
        return self.install()
