"""Default configuration values."""

# Config directory, under both the home directory and the project root
CONFIG_DIRNAME = ".agent"

# Checked in order; the first file present in a directory is the layer
CONFIG_FILENAMES = ["permissions.jsonc", "permissions.json"]

# Environment equivalents of the command-line overrides
PERMISSION_MODE_ENV = "PERMISSION_MODE"
SKIP_PERMISSIONS_ENV = "DANGEROUSLY_SKIP_PERMISSIONS"

# Server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
