"""Default locations and names used when nothing overrides them."""

CONTAINER_NAME = "uyuni-server"
BACKUP_DIR = "/var/lib/containers/storage/db-dumps/"
SERVER_CONFIG_FILE = "/etc/rhn/rhn.conf"
CONTAINER_RUNTIME = "podman"
SUPPORTED_RUNTIMES = ["podman", "docker"]

# susemanager, then reportdb
DATABASE_PREFIXES = ("db", "report_db")

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
DUMP_SUFFIX = ".sql.gz"
