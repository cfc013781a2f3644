"""Domain errors for uyuni-db-backup."""


class BackupError(RuntimeError):
    """Raised when a backup cannot continue safely."""
