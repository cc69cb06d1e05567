"""Global configuration: paths, constants, settings."""

from pathlib import Path

# Separator between the segments of a package name, e.g. "org.thinkit.generator"
PACKAGE_DELIMITER = "."

# Bundled platform -> default output rule table
DEFAULT_RULES_PATH = Path(__file__).parent / "content" / "data" / "default_output_path.json"

# Project-level config directory and files read by ConfigManager
CONFIG_DIR = ".mdgen"
CONFIG_FILENAME = "config.json"
ENV_FILENAME = ".env"

# Environment variable names
ENV_PROFILE = "MDGEN_ENV"
ENV_LOG_LEVEL = "MDGEN_LOG_LEVEL"
ENV_OUTPUT_RULES = "MDGEN_OUTPUT_RULES"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
