"""
YAML configuration loader with SOPS support.

Supports loading settings from plain YAML files and from SOPS-encrypted
YAML files (recognized by the `.enc.yaml` / `.enc.yml` suffix).
"""

import subprocess
from pathlib import Path
from typing import Any

import yaml


def is_encrypted_path(file_path: Path) -> bool:
    """Check whether a config path names a SOPS-encrypted file."""
    name = file_path.name.lower()
    return name.endswith(".enc.yaml") or name.endswith(".enc.yml")


def decrypt_sops_file(file_path: Path) -> dict[str, Any]:
    """
    Decrypt a SOPS-encrypted file and return parsed YAML.

    Args:
        file_path: Path to the encrypted file

    Returns:
        Decrypted configuration as dictionary

    Raises:
        FileNotFoundError: If file doesn't exist
        RuntimeError: If SOPS decryption fails
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Encrypted config file not found: {file_path}")

    try:
        result = subprocess.run(
            ["sops", "-d", str(file_path)],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise RuntimeError(f"SOPS decryption failed: {e.stderr}") from e
    except FileNotFoundError:
        raise RuntimeError(
            "SOPS not installed. Install with: brew install sops (macOS) "
            "or download from https://github.com/getsops/sops/releases"
        )
    return _parse_yaml(result.stdout, file_path)


def load_config_file(file_path: Path) -> dict[str, Any]:
    """
    Load a YAML config file, decrypting it with SOPS when encrypted.

    Args:
        file_path: Path to the config file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        RuntimeError: If SOPS decryption fails
        ValueError: If the file is not a YAML mapping
    """
    if is_encrypted_path(file_path):
        return decrypt_sops_file(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    return _parse_yaml(file_path.read_text(encoding="utf-8"), file_path)


def _parse_yaml(text: str, file_path: Path) -> dict[str, Any]:
    try:
        config = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {file_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(
            f"Config file {file_path} must contain a mapping, "
            f"got {type(config).__name__}"
        )
    return config
