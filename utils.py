# utils.py
"""
Startup helpers for LifePortal: reading `config.json` and wiring the root
logger before any screen or store is built.

The config file is one JSON object with optional sections (`logging`,
`window`, `particles`, `storage`, `run_control`). Every consumer reads its
section through `get_section`, so a missing or null section simply means
"use the defaults from constants.py".
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

DEFAULT_LOG_FILE = 'logs/lifeportal.log'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 5

# --- Data Contracts ---
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed top-level JSON object.
#   - Raises: FileNotFoundError or json.JSONDecodeError (logged first), and
#     ValueError when the file holds something other than an object.
#     main() prints these as FATAL since logging is not configured yet.
#
# get_section(config, name) -> Dict[str, Any]:
#   - Outputs: config[name] when it is an object; {} when the key is
#     absent, null or any other JSON type. Never raises.
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs: the whole config. Only the `logging` section is read:
#     "level" (default INFO), "format" and "log_file"
#     (default logs/lifeportal.log).
#   - Side Effects: Replaces every handler on the root logger with one
#     console handler and one RotatingFileHandler (1 MB, 5 backups).
#     Creates the log file's directory. Calling it twice does not
#     duplicate output.


def load_config(path: str) -> Dict[str, Any]:
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise
    if not isinstance(config, dict):
        raise ValueError(f"{path} must contain a JSON object, found {type(config).__name__}.")
    logging.info("Configuration loaded successfully.")
    return config


def get_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Returns a config section, or an empty dict if it is absent or not an object."""
    section = config.get(name)
    return section if isinstance(section, dict) else {}


def setup_logging(config: Dict[str, Any]) -> None:
    """Points the root logger at the console and a rotating log file."""
    log_config = get_section(config, 'logging')
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info(f"Logging to console and {log_file_path} at {log_level}.")
