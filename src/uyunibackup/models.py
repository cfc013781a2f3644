"""Shared domain models for uyuni-db-backup."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings of one database, as read from the server config."""

    prefix: str
    user: str
    password: str = field(repr=False)
    name: str
    host: str
    port: str
    ssl_enabled: str
    ssl_root_cert: str = ""

    @property
    def use_ssl(self) -> bool:
        return self.ssl_enabled == "1"

    def missing_required(self) -> List[str]:
        missing = []
        for key in ("user", "password", "name"):
            if not getattr(self, key):
                missing.append(f"{self.prefix}_{key}")
        return missing


@dataclass
class BackupResult:
    prefix: str
    database: Optional[str] = None
    path: Optional[str] = None
    success: bool = False
    error: Optional[str] = None
