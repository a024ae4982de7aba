"""Run configuration for contract-bindgen."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from .constants import (
    DEFAULT_ABIGEN,
    DEFAULT_API_MAX_RETRIES,
    DEFAULT_API_RETRY_DELAY,
    DEFAULT_ETHERSCAN_API_URL,
    DEFAULT_METADATA_EXTENSION,
)
from .exceptions import ConfigurationError


@dataclass
class BindgenConfig:
    """Settings shared by the Etherscan and local generation runs."""

    contracts_list: Union[Path, str]
    package_name: str
    metadata_output_dir: Union[Path, str]
    source_maps_list: str = ""  # Comma separated contract names
    bindings_output_dir: Optional[Union[Path, str]] = None  # Defaults to ./<package_name>

    # Etherscan contracts
    etherscan_api_key: Optional[str] = None
    etherscan_api_url: str = DEFAULT_ETHERSCAN_API_URL
    api_max_retries: int = DEFAULT_API_MAX_RETRIES
    api_retry_delay: float = DEFAULT_API_RETRY_DELAY

    # Local contracts
    forge_artifacts: Optional[Union[Path, str]] = None
    monorepo_base: str = ""
    strict_artifact_names: bool = False

    abigen: str = DEFAULT_ABIGEN
    metadata_extension: str = DEFAULT_METADATA_EXTENSION
    fail_fast: bool = True

    def __post_init__(self) -> None:
        self.contracts_list = Path(self.contracts_list)
        self.metadata_output_dir = Path(self.metadata_output_dir)
        if self.bindings_output_dir is None:
            self.bindings_output_dir = Path(self.package_name)
        else:
            self.bindings_output_dir = Path(self.bindings_output_dir)
        if self.forge_artifacts is not None:
            self.forge_artifacts = Path(self.forge_artifacts)

        if not self.package_name:
            raise ConfigurationError("A package name is required")
        if self.api_max_retries < 1:
            raise ConfigurationError(
                f"api_max_retries must be at least 1, got {self.api_max_retries}"
            )
        if self.api_retry_delay < 0:
            raise ConfigurationError(
                f"api_retry_delay must not be negative, got {self.api_retry_delay}"
            )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "BindgenConfig":
        """
        Build a config, filling unset values from the environment.

        Environment variables:
            ETHERSCAN_API_KEY: etherscan_api_key
            ETHERSCAN_API_URL: etherscan_api_url
            BINDGEN_API_MAX_RETRIES: api_max_retries
            BINDGEN_API_RETRY_DELAY: api_retry_delay

        Explicit keyword arguments other than None take precedence.

        Raises:
            ConfigurationError: If a numeric environment value is invalid
        """
        env_fields = {
            "etherscan_api_key": ("ETHERSCAN_API_KEY", str),
            "etherscan_api_url": ("ETHERSCAN_API_URL", str),
            "api_max_retries": ("BINDGEN_API_MAX_RETRIES", int),
            "api_retry_delay": ("BINDGEN_API_RETRY_DELAY", float),
        }
        for field_name, (env_var, convert) in env_fields.items():
            if kwargs.get(field_name) is not None:
                continue
            kwargs.pop(field_name, None)
            raw = os.environ.get(env_var)
            if raw is None:
                continue
            try:
                kwargs[field_name] = convert(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_var}: {raw!r}") from e

        return cls(**kwargs)
