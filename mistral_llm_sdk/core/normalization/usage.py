"""
Usage normalization module.

Normalizes token usage reported by the API (or estimated when a stream
ends without one) into the SDK's standard shape.
"""

from typing import Any, Dict, Optional


def normalize_usage(
    usage_data: Optional[Dict[str, Any]],
    provider: str = "mistral",
    prompt_tokens: Optional[int] = None,
    completion_tokens: Optional[int] = None,
    total_tokens: Optional[int] = None
) -> Dict[str, Any]:
    """
    Normalize usage data into standard SDK format.

    The result always has the shape:
    {
        "prompt_tokens": int,
        "completion_tokens": int,
        "total_tokens": int
    }

    Args:
        usage_data: Raw usage data from provider (optional)
        provider: Provider name for provider-specific handling
        prompt_tokens: Override for prompt tokens
        completion_tokens: Override for completion tokens
        total_tokens: Override for total tokens

    Returns:
        Dict with normalized usage data
    """
    normalized = {
        "prompt_tokens": 0,
        "completion_tokens": 0,
        "total_tokens": 0,
    }

    if usage_data:
        if provider == "mistral":
            normalized["prompt_tokens"] = usage_data.get("prompt_tokens") or 0
            normalized["completion_tokens"] = usage_data.get("completion_tokens") or 0
            normalized["total_tokens"] = usage_data.get("total_tokens") or 0
        else:
            # Generic mapping for unknown providers
            for prompt_field in ["prompt_tokens", "input_tokens", "prompt_token_count"]:
                if prompt_field in usage_data:
                    normalized["prompt_tokens"] = usage_data[prompt_field] or 0
                    break

            for completion_field in ["completion_tokens", "output_tokens", "generated_tokens"]:
                if completion_field in usage_data:
                    normalized["completion_tokens"] = usage_data[completion_field] or 0
                    break

            normalized["total_tokens"] = usage_data.get("total_tokens") or 0

    # Apply overrides if provided
    if prompt_tokens is not None:
        normalized["prompt_tokens"] = prompt_tokens
    if completion_tokens is not None:
        normalized["completion_tokens"] = completion_tokens
    if total_tokens is not None:
        normalized["total_tokens"] = total_tokens

    normalized["prompt_tokens"] = int(normalized["prompt_tokens"])
    normalized["completion_tokens"] = int(normalized["completion_tokens"])
    normalized["total_tokens"] = int(normalized["total_tokens"])

    if normalized["total_tokens"] == 0:
        normalized["total_tokens"] = normalized["prompt_tokens"] + normalized["completion_tokens"]

    return normalized


def calculate_usage_cost(
    usage: Dict[str, Any],
    input_cost_per_1k: float,
    output_cost_per_1k: float
) -> float:
    """
    Calculate the cost of usage based on token counts and pricing.

    Args:
        usage: Normalized usage dict
        input_cost_per_1k: Cost per 1K input tokens
        output_cost_per_1k: Cost per 1K output tokens

    Returns:
        Total cost in USD
    """
    prompt_tokens = usage.get("prompt_tokens", 0)
    completion_tokens = usage.get("completion_tokens", 0)

    input_cost = (prompt_tokens / 1000) * input_cost_per_1k
    output_cost = (completion_tokens / 1000) * output_cost_per_1k

    return input_cost + output_cost
