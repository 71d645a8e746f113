"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

HIGH_THRESHOLD_WARNING = 0.9
LOW_THRESHOLD_WARNING = 0.05
LARGE_CANDIDATE_LIMIT = 1000


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    categorization = config_dict.get("categorization") or {}
    if isinstance(categorization, dict):
        threshold = categorization.get("acceptance_threshold")
        if isinstance(threshold, (int, float)) and not isinstance(threshold, bool):
            if threshold >= HIGH_THRESHOLD_WARNING:
                warning_messages.append(
                    f"High acceptance_threshold ({threshold}) will put most skills in 'Other'"
                )
            elif 0 < threshold <= LOW_THRESHOLD_WARNING:
                warning_messages.append(
                    f"Low acceptance_threshold ({threshold}) accepts categories on a single weak keyword"
                )

    matching = config_dict.get("matching") or {}
    if isinstance(matching, dict):
        limit = matching.get("candidate_limit")
        if isinstance(limit, int) and not isinstance(limit, bool) and limit > LARGE_CANDIDATE_LIMIT:
            warning_messages.append(
                f"Large candidate_limit ({limit}) makes ranking output hard to read"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
