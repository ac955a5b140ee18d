"""File operations utility module.

This module provides helpers for loading the JSON documents (schemas and
instances) and YAML configuration files consumed by the CLI.
"""

from pathlib import Path
from typing import Any

import orjson
import yaml


def read_file(file_path: str | Path, encoding: str = "utf-8") -> str:
    """Reads the content of a text file.

    Args:
        file_path: The path to the file to read.
        encoding: The encoding to use (default: "utf-8").

    Returns:
        The content of the file as a string.

    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If an I/O error occurs during reading.
    """
    with open(file_path, encoding=encoding) as f:
        return f.read()


def read_json(file_path: str | Path) -> Any:
    """Reads a JSON file.

    Args:
        file_path: The path to the JSON file.

    Returns:
        The parsed JSON content.

    Raises:
        FileNotFoundError: If the file does not exist.
        JSONDecodeError: If the file content is not valid JSON.
    """
    return orjson.loads(Path(file_path).read_bytes())


def read_yaml(file_path: str | Path, encoding: str = "utf-8") -> Any:
    """Reads a YAML file.

    Args:
        file_path: The path to the YAML file.
        encoding: The encoding to use (default: "utf-8").

    Returns:
        The parsed YAML content, or None for an empty file.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file content is not valid YAML.
    """
    return yaml.safe_load(read_file(file_path, encoding=encoding))
