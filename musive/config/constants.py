"""Constants for the configuration module."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"

# Supported URL schemes
VALID_URL_SCHEMES = ("http://", "https://")

# Headers that must come from the environment, never from config files
FORBIDDEN_CONFIG_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
