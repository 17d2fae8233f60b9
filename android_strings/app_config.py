"""Application configuration module for the strings sync tool."""
import logging
import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Any

import jsonschema
import yaml
from dotenv import load_dotenv

from android_strings.logging_config import setup_logger

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "res_dir": {"type": "string"},
        "localize_output_dir": {"type": "string"},
        "localized_input_dir": {"type": "string"},
        "localized_input_format": {"enum": ["wide", "narrow"]},
        "strict_validation": {"type": "boolean"},
        "show_progress": {"type": "boolean"},
        "supported_locales": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "code": {"type": "string"},
                    "name": {"type": "string"}
                },
                "required": ["code", "name"]
            }
        },
        "logging": {
            "type": "object",
            "properties": {
                "log_level": {"type": "string"},
                "log_file_path": {"type": "string"},
                "log_to_console": {"type": "boolean"}
            }
        }
    }
}


@dataclass
class AppConfig:
    """Application configuration dataclass."""
    # Core paths
    project_root: str
    res_dir: str
    localize_output_dir: str
    localized_input_dir: str

    # Processing settings
    localized_input_format: str
    strict_validation: bool
    show_progress: bool

    # Language configuration
    language_codes: Dict[str, str]
    name_to_code: Dict[str, str]


def _compute_project_root() -> str:
    """Compute the project root directory."""
    script_real_path = os.path.realpath(__file__)
    script_dir = os.path.dirname(script_real_path)
    return os.path.abspath(os.path.join(script_dir, os.pardir))


def _load_dotenv_files(project_root: str) -> None:
    """Load .env files from project root or docker directory."""
    dotenv_path_project_root = os.path.join(project_root, '.env')
    dotenv_path_docker_dir = os.path.join(project_root, 'docker', '.env')

    if os.path.exists(dotenv_path_project_root):
        load_dotenv(dotenv_path_project_root)
    elif os.path.exists(dotenv_path_docker_dir):
        load_dotenv(dotenv_path_docker_dir)


def _load_yaml_config(project_root: str, config_file: Optional[str] = None) -> Dict[str, Any]:
    """Load and schema-check the YAML configuration file, falling back to defaults on any problem."""
    # An explicit path wins over STRINGS_SYNC_CONFIG_FILE, which wins over 'config.yaml'.
    default_config_path = os.path.join(project_root, 'config.yaml')
    if config_file is None:
        config_file = os.environ.get('STRINGS_SYNC_CONFIG_FILE', default_config_path)

    if not os.path.isabs(config_file):
        config_file = os.path.abspath(config_file)

    config = {}
    try:
        if not os.path.exists(config_file):
            print(f"Warning: Configuration file '{config_file}' not found. Using default configuration.",
                  file=sys.stderr)
            return config

        if not os.access(config_file, os.R_OK):
            print(f"Error: Configuration file '{config_file}' exists but is not readable. Check file permissions.",
                  file=sys.stderr)
            return config

        with open(config_file, 'r', encoding='utf-8') as config_file_stream:
            loaded_config = yaml.safe_load(config_file_stream)
            if loaded_config is None:
                print(f"Warning: Configuration file '{config_file}' is empty. Using default configuration.",
                      file=sys.stderr)
            elif isinstance(loaded_config, dict):
                jsonschema.validate(instance=loaded_config, schema=CONFIG_SCHEMA)
                config = loaded_config
            else:
                print(f"Error: Configuration file '{config_file}' must contain a YAML dictionary. Using defaults.",
                      file=sys.stderr)

    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file '{config_file}': {e}", file=sys.stderr)
        print("Please check your YAML syntax. Using default configuration.", file=sys.stderr)
    except jsonschema.ValidationError as e:
        print(f"Error: Invalid configuration in '{config_file}': {e.message}", file=sys.stderr)
        print("Using default configuration.", file=sys.stderr)
    except OSError as e:
        print(f"Error: Could not read configuration file '{config_file}': {e}", file=sys.stderr)
        print("Using default configuration.", file=sys.stderr)

    return config


def _setup_logger_from_config(config: Dict[str, Any]) -> logging.Logger:
    """Set up logger based on configuration."""
    log_config = config.get('logging', {})
    log_level_str = log_config.get('log_level', 'INFO').upper()
    log_file_path = log_config.get('log_file_path', 'logs/android_strings.log')
    log_to_console = log_config.get('log_to_console', True)
    return setup_logger(log_level_str, log_file_path, log_to_console)


def _log_dotenv_status(logger: logging.Logger, project_root: str) -> None:
    """Log the status of .env file loading."""
    dotenv_path_project_root = os.path.join(project_root, '.env')
    dotenv_path_docker_dir = os.path.join(project_root, 'docker', '.env')

    if os.path.exists(dotenv_path_project_root):
        logger.debug("Loaded environment variables from: %s", dotenv_path_project_root)
    elif os.path.exists(dotenv_path_docker_dir):
        logger.debug("Loaded environment variables from: %s", dotenv_path_docker_dir)
    else:
        logger.debug("No .env file found. Relying on system environment variables if any.")


def _build_language_mappings(locales_list: List[Dict[str, str]]) -> tuple[Dict[str, str], Dict[str, str]]:
    """Build locale id <-> human-friendly name mappings from supported locales."""
    language_codes: Dict[str, str] = {}
    name_to_code: Dict[str, str] = {}

    for locale in locales_list:
        code = locale.get('code')
        name = locale.get('name')
        if code and name:
            language_codes[code] = name
            name_to_code[name] = code

    return language_codes, name_to_code


def load_app_config(config_file: Optional[str] = None) -> AppConfig:
    """
    Load application configuration from YAML file and environment variables.

    Args:
        config_file: Optional explicit path of the YAML file.

    Returns:
        AppConfig: The loaded application configuration.
    """
    project_root = _compute_project_root()

    _load_dotenv_files(project_root)

    config = _load_yaml_config(project_root, config_file)

    logger = _setup_logger_from_config(config)
    _log_dotenv_status(logger, project_root)

    locales_list = config.get('supported_locales', [])
    language_codes, name_to_code = _build_language_mappings(locales_list)

    res_dir = os.environ.get('STRINGS_SYNC_RES_DIR', config.get('res_dir', 'res'))

    return AppConfig(
        project_root=project_root,
        res_dir=res_dir,
        localize_output_dir=config.get('localize_output_dir', 'to_localize'),
        localized_input_dir=config.get('localized_input_dir', 'localized'),
        localized_input_format=config.get('localized_input_format', 'wide'),
        strict_validation=config.get('strict_validation', False),
        show_progress=config.get('show_progress', True),
        language_codes=language_codes,
        name_to_code=name_to_code
    )
