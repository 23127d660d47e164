"""Exceptions raised by the zoipack tools."""


class ZoiPackError(Exception):
    """Base class for every failure that aborts a zoipack invocation."""


class InvalidTrack(ZoiPackError, ValueError):
    pass


class InvalidBumpPart(ZoiPackError, ValueError):
    pass


class InvalidBranchToken(ZoiPackError, ValueError):
    pass


class InvalidVersionFormat(ZoiPackError, ValueError):
    pass


class UnknownSetKey(ZoiPackError, ValueError):
    pass


class MissingArgument(ZoiPackError, ValueError):
    pass


class InvalidPlatformKey(ZoiPackError, ValueError):
    pass


class InvalidChecksum(ZoiPackError, ValueError):
    pass


class MissingFile(ZoiPackError):
    """A release artifact could not be found on disk."""


class MalformedJson(ZoiPackError):
    """The version status file is not valid JSON or lacks the track objects."""


class UnsupportedPlatform(ZoiPackError):
    pass


class DownloadFailed(ZoiPackError):
    pass


class InstallerExecFailed(ZoiPackError):
    """The installer shell could not be started."""


class UsageError(ZoiPackError):
    """The command line could not be parsed; usage is shown instead."""
