"""
Configuration and Feature Flags for the Transformer engine

Flags are controlled via environment variables so engine behaviour can be
toggled without code changes.

Usage:
    from transformer.config.settings import is_enabled

    if is_enabled('resolve_operation_links'):
        value = results.get(link.target_call_id)

Environment Variables:
    TRANSFORMER_OPERATION_LINKS=true/false - Resolve links to other calls' results
    TRANSFORMER_STOP_ON_ERROR=true/false   - Stop a program run at the first failed call
    TRANSFORMER_STRICT_PARAMS=true/false   - Reject call parameters missing from the schema
"""

import os
from typing import Dict


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


# Feature flags with environment variable overrides
FEATURE_FLAGS: Dict[str, bool] = {
    'resolve_operation_links': _env_flag('TRANSFORMER_OPERATION_LINKS', 'true'),
    'stop_on_error': _env_flag('TRANSFORMER_STOP_ON_ERROR', 'true'),
    'strict_parameters': _env_flag('TRANSFORMER_STRICT_PARAMS', 'true'),
}


def is_enabled(flag: str) -> bool:
    """
    Check if a feature flag is enabled.

    Args:
        flag: Feature flag name (e.g., 'stop_on_error')

    Returns:
        True if flag is enabled, False otherwise

    Raises:
        KeyError: If flag name is not recognized

    Example:
        >>> is_enabled('stop_on_error')
        True  # Default

        >>> # After: export TRANSFORMER_STOP_ON_ERROR=false
        >>> is_enabled('stop_on_error')
        False
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    return FEATURE_FLAGS[flag]


def get_all_flags() -> Dict[str, bool]:
    """
    Get all feature flags and their current state.

    Returns:
        Dictionary of flag names to boolean values
    """
    return FEATURE_FLAGS.copy()


def set_flag(flag: str, enabled: bool) -> None:
    """
    Programmatically set a feature flag (for testing only).

    Args:
        flag: Feature flag name
        enabled: True to enable, False to disable

    Warning:
        This is for testing only. In production, use environment variables.
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    FEATURE_FLAGS[flag] = enabled
