"""Startup errors. Each one aborts the run before a log file is created."""


class PhotoSyncError(Exception):
    """Base class for fatal photo-sync errors."""


class ConfigMissing(PhotoSyncError):
    def __init__(self, path):
        self.path = path
        super().__init__(
            f"Configuration file not found at {path}\n"
            "Please copy .env.example to .env and update with your paths."
        )


class ConfigIncomplete(PhotoSyncError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"{' and '.join(missing)} must be set in .env")


class UnmountedDestination(PhotoSyncError):
    def __init__(self, path):
        self.path = path
        super().__init__(
            f"CRITICAL ERROR: Destination {path} is not on a mounted volume.\n"
            "Please mount your NAS and try again."
        )
