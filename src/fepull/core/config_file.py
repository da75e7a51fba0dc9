#!/usr/bin/env python3
"""
Project Configuration File Module

Reads and writes ``fepull.config.yml``, the entry-centric list of packages a
project wants installed. Each entry fully specifies its own source and
target.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Links to third-party package documentation:
- PyYAML: https://pyyaml.org/wiki/PyYAMLDocumentation
- Pydantic: https://docs.pydantic.dev/latest/

Sample input:
    packages:
      - name: button
        source:
          url: https://github.com/org/ui-kit
          packagesDir: packages
        package: button
        target: ./src/components/button

Expected output:
    FepullConfig(packages=[PackageEntry(name='button', ...)])
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from fepull.core.constants import CONFIG_FILE
from fepull.core.errors import ConfigError
from fepull.core.models import FepullConfig, PackageEntry, PackageSource

PathLike = Union[str, Path]


def default_config() -> FepullConfig:
    return FepullConfig(packages=[])


def example_config() -> FepullConfig:
    """Starter configuration written by ``fepull init``."""
    return FepullConfig(
        packages=[
            PackageEntry(
                name="example-package",
                source=PackageSource(
                    url="https://github.com/your-org/your-repo", packages_dir="packages"
                ),
                package="example-package",
                target="./src/components/example-package",
                description="Example package entry",
            )
        ]
    )


def config_exists(path: PathLike = CONFIG_FILE) -> bool:
    return Path(path).is_file()


def load_config(path: PathLike = CONFIG_FILE) -> FepullConfig:
    """
    Parse and validate a configuration file.

    Raises:
        ConfigError: the file is missing, is not valid YAML or fails validation
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return default_config()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping with a 'packages' list")
    try:
        return FepullConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def read_config(path: PathLike = CONFIG_FILE) -> Optional[FepullConfig]:
    """Like ``load_config`` but returns None instead of raising."""
    try:
        return load_config(path)
    except ConfigError as e:
        logger.error(str(e))
        return None


def write_config(config: FepullConfig, path: PathLike = CONFIG_FILE) -> None:
    data = config.model_dump(by_alias=True, exclude_none=True)
    try:
        Path(path).write_text(
            yaml.safe_dump(data, sort_keys=False, default_flow_style=False, indent=2),
            encoding="utf-8",
        )
    except OSError as e:
        raise ConfigError(f"Could not write {path}: {e}") from e
    logger.debug(f"Wrote configuration with {len(config.packages)} package(s) to {path}")


def init_config(path: PathLike = CONFIG_FILE) -> bool:
    """
    Create a starter configuration file.

    Returns:
        bool: False when the file already exists (it is left untouched)
    """
    if config_exists(path):
        return False
    write_config(example_config(), path)
    return True
