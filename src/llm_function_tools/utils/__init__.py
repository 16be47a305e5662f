"""Utility functions for environment-based configuration."""

from .config import (
    create_litellm_client,
    create_orchestrator,
    get_available_providers,
    get_default_models,
    get_max_rounds,
    load_environment,
)

__all__ = [
    "load_environment",
    "create_litellm_client",
    "create_orchestrator",
    "get_available_providers",
    "get_default_models",
    "get_max_rounds",
]
