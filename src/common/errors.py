"""Error taxonomy for the plugin.

Every error is terminal for the current invocation; the entrypoint logs the
message prefixed with the plugin name and exits non-zero.
"""


class PluginError(Exception):
    """Base class for all plugin failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnsupportedInstallType(PluginError):
    """asdf asked for something other than a version install."""


class VariantUnavailable(PluginError):
    """No published archive satisfies the selection constraints."""


class InvalidChecksumFormat(PluginError):
    """Checksum artifact is in neither known encoding."""


class ChecksumFetchFailed(PluginError):
    """No checksum artifact could be fetched for the archive."""


class ChecksumMismatch(PluginError):
    """Local archive digest differs from the published one."""


class InstallAssertionFailed(PluginError):
    """Installed tree does not contain a runnable executable."""


class InvalidArchiveRequest(PluginError):
    """Archive URL cannot be built from the given version and filename."""


class ArchiveDownloadFailed(PluginError):
    """Archive could not be downloaded or unpacked."""
