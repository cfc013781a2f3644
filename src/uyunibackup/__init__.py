"""
uyuni-db-backup - Dump the Uyuni server databases from the running container
"""

__version__ = "0.1.0"

from .core import DatabaseBackup
from .errors import BackupError

__all__ = ["DatabaseBackup", "BackupError"]
