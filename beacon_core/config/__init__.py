"""
Runtime Configuration Module

Provides configuration loading and management.
"""

from .runtime import (
    RuntimeConfig,
    BeaconAPIConfig,
    VerificationConfig,
    EthereumNodeConfig,
    load_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "BeaconAPIConfig",
    "VerificationConfig",
    "EthereumNodeConfig",
    "load_config",
    "get_default_config_template",
]
