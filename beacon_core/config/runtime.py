"""
Runtime Configuration

Central configuration for header fetching, proof generation and
verification.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from beacon_core.chain.verifier import BEACON_ROOTS_ADDRESS
from beacon_core.schemas.errors import ConfigurationException
from beacon_core.schemas.header import HEADER_FIELDS

load_dotenv()

ENV_PREFIX = "BEACON_PROOF_"

DEFAULT_BEACON_ENDPOINT = "http://localhost:5052"
DEFAULT_VERIFIER_ADDRESS = "0x4D581D208fe2645A97Bee8344c5073c6729a715b"
HOLESKY_CHAIN_ID = 17000


@dataclass
class BeaconAPIConfig:
    """Beacon node REST API settings."""
    endpoints: list[str] = field(default_factory=lambda: [DEFAULT_BEACON_ENDPOINT])
    retry_attempts: int = 5
    request_timeout_ms: int = 5000

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self.request_timeout_ms / 1000.0


@dataclass
class VerificationConfig:
    """Which fields to prove and where to verify them."""
    verifier_address: str = DEFAULT_VERIFIER_ADDRESS
    oracle_address: str = BEACON_ROOTS_ADDRESS
    fields_to_verify: list[str] = field(default_factory=lambda: list(HEADER_FIELDS))


@dataclass
class EthereumNodeConfig:
    """Execution node JSON-RPC settings."""
    endpoint: str = ""
    chain_id: int = HOLESKY_CHAIN_ID


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    beacon_api: BeaconAPIConfig = field(default_factory=BeaconAPIConfig)
    verification: VerificationConfig = field(default_factory=VerificationConfig)
    ethereum_node: EthereumNodeConfig = field(default_factory=EthereumNodeConfig)
    slot: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check field names and numeric bounds.

        Raises:
            ConfigurationException: on the first invalid setting
        """
        for name, value in (
            ("retry_attempts", self.beacon_api.retry_attempts),
            ("request_timeout_ms", self.beacon_api.request_timeout_ms),
            ("chain_id", self.ethereum_node.chain_id),
        ):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationException(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.beacon_api.endpoints, list):
            raise ConfigurationException("endpoints must be a list of URLs")
        if not isinstance(self.verification.fields_to_verify, list):
            raise ConfigurationException("fields_to_verify must be a list of field names")

        unknown = [f for f in self.verification.fields_to_verify if f not in HEADER_FIELDS]
        if unknown:
            raise ConfigurationException(
                f"unknown fields to verify: {unknown}. Must be among {list(HEADER_FIELDS)}",
                details={"fields": unknown},
            )
        if self.beacon_api.retry_attempts < 1:
            raise ConfigurationException("retry_attempts must be at least 1")
        if self.beacon_api.request_timeout_ms <= 0:
            raise ConfigurationException("request_timeout_ms must be positive")
        if self.slot is not None and not str(self.slot).isdigit():
            raise ConfigurationException(f"slot must be a decimal integer, got {self.slot!r}")

    @property
    def beacon_endpoint(self) -> str:
        """The Beacon API endpoint in use (the first configured)."""
        if not self.beacon_api.endpoints:
            raise ConfigurationException("no beacon API endpoints configured")
        return self.beacon_api.endpoints[0]

    @property
    def eth_endpoint(self) -> str:
        """Execution endpoint, falling back to the Beacon endpoint when unset."""
        return self.ethereum_node.endpoint or self.beacon_endpoint

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - BEACON_PROOF_BEACON_ENDPOINT: Beacon API endpoint
        - BEACON_PROOF_RETRIES: slot search attempts
        - BEACON_PROOF_TIMEOUT_MS: Beacon API request timeout
        - BEACON_PROOF_ETH_ENDPOINT: execution JSON-RPC endpoint
        - BEACON_PROOF_VERIFIER_ADDRESS: verifier contract address
        - BEACON_PROOF_FIELDS: comma-separated field names
        - BEACON_PROOF_SLOT: slot to verify
        - BEACON_PROOF_LOG_LEVEL / BEACON_PROOF_LOG_FILE: logging
        """
        overrides: dict[str, Any] = {}

        def env(name: str) -> Optional[str]:
            return os.getenv(f"{ENV_PREFIX}{name}") or None

        def env_int(name: str) -> int:
            raw = env(name)
            try:
                return int(raw)
            except ValueError:
                raise ConfigurationException(
                    f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
                ) from None

        if env("BEACON_ENDPOINT"):
            overrides.setdefault("beacon_api", {})["endpoints"] = [env("BEACON_ENDPOINT")]
        if env("RETRIES"):
            overrides.setdefault("beacon_api", {})["retry_attempts"] = env_int("RETRIES")
        if env("TIMEOUT_MS"):
            overrides.setdefault("beacon_api", {})["request_timeout_ms"] = env_int("TIMEOUT_MS")

        if env("ETH_ENDPOINT"):
            overrides.setdefault("ethereum_node", {})["endpoint"] = env("ETH_ENDPOINT")

        if env("VERIFIER_ADDRESS"):
            overrides.setdefault("verification", {})["verifier_address"] = env("VERIFIER_ADDRESS")
        if env("FIELDS"):
            overrides.setdefault("verification", {})["fields_to_verify"] = [
                f.strip() for f in env("FIELDS").split(",") if f.strip()
            ]

        if env("SLOT"):
            overrides["slot"] = env("SLOT")
        if env("LOG_LEVEL"):
            overrides["log_level"] = env("LOG_LEVEL")
        if env("LOG_FILE"):
            overrides["log_file"] = env("LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationException(f"Config file is not valid YAML: {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationException(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        try:
            beacon_api = BeaconAPIConfig(**(data.get("beacon_api") or {}))
            verification = VerificationConfig(**(data.get("verification") or {}))
            ethereum_node = EthereumNodeConfig(**(data.get("ethereum_node") or {}))
        except TypeError as e:
            raise ConfigurationException(f"invalid configuration: {e}") from e

        slot = data.get("slot")
        return cls(
            beacon_api=beacon_api,
            verification=verification,
            ethereum_node=ethereum_node,
            slot=str(slot) if slot is not None else None,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self
        return self.with_overrides(overrides)

    def with_overrides(self, overrides: dict[str, Any]) -> "RuntimeConfig":
        """Return a copy with a nested override dict applied."""
        new_config = copy.deepcopy(self)

        for section in ("beacon_api", "verification", "ethereum_node"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        for key in ("slot", "log_level", "log_file"):
            if key in overrides:
                setattr(new_config, key, overrides[key])

        new_config.validate()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "beacon_api": {
                "endpoints": list(self.beacon_api.endpoints),
                "retry_attempts": self.beacon_api.retry_attempts,
                "request_timeout_ms": self.beacon_api.request_timeout_ms,
            },
            "verification": {
                "verifier_address": self.verification.verifier_address,
                "oracle_address": self.verification.oracle_address,
                "fields_to_verify": list(self.verification.fields_to_verify),
            },
            "ethereum_node": {
                "endpoint": self.ethereum_node.endpoint,
                "chain_id": self.ethereum_node.chain_id,
            },
            "slot": self.slot,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def load_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from an optional YAML file, then environment.

    Environment variables override file settings.
    """
    if path is not None:
        config = RuntimeConfig.from_yaml(path)
    else:
        config = RuntimeConfig()
    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return yaml.safe_dump(RuntimeConfig().to_dict(), sort_keys=False)
