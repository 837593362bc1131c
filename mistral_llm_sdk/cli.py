"""CLI entry point for Mistral LLM SDK."""

import argparse
import asyncio
import json
from typing import Optional

from .api.client import MistralClient
from .config.schema import describe_schema
from .core.registry import get_available_models, is_model_available
from .errors import ConfigurationError
from .providers.base import ProviderError


async def generate_text(model: Optional[str], prompt: str, max_tokens: Optional[int] = None,
                        temperature: Optional[float] = None, stream: bool = False) -> int:
    """Generate text using the specified model."""
    client = MistralClient()

    params = {}
    if max_tokens:
        params['max_tokens'] = max_tokens
    if temperature is not None:
        params['temperature'] = temperature

    try:
        if stream:
            print("Streaming response:\n")
            async for chunk in client.stream(prompt, model, **params):
                print(chunk, end='', flush=True)
            print()
        else:
            result = await client.generate(prompt, model, **params)
            print(f"Response from {result.model}:\n")
            print(result.text)
            print(f"\nTokens used: {result.usage}")
            if result.cost_usd is not None:
                print(f"Cost: ${result.cost_usd:.6f}")
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        for name, message in e.errors.items():
            print(f"  {name}: {message}")
        return 2
    except ProviderError as e:
        print(f"Error: {e}")
        return 1
    return 0


def list_models():
    """List all enabled models."""
    print("Available Models:")
    print("-" * 50)
    for model_id, config in get_available_models().items():
        status = "✓" if is_model_available(model_id) else "✗"
        print(f"{status} {model_id} ({config.display_name})")
        print(f"   {config.description}")
        if config.input_cost_per_1k_tokens is not None:
            print(f"   Cost: ${config.input_cost_per_1k_tokens}/1k in, "
                  f"${config.output_cost_per_1k_tokens}/1k out")
        print()


def show_schema():
    """Print the request parameter schema."""
    print(json.dumps(describe_schema(), indent=2))


def main():
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Mistral LLM SDK CLI")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    generate_parser = subparsers.add_parser('generate', help='Generate text with a Mistral model')
    generate_parser.add_argument('prompt', help='Text prompt')
    generate_parser.add_argument('--model', help='Model ID (e.g., "mistral-small-latest")')
    generate_parser.add_argument('--max-tokens', type=int, help='Maximum tokens to generate')
    generate_parser.add_argument('--temperature', type=float, help='Temperature (0.0-1.5)')
    generate_parser.add_argument('--stream', action='store_true', help='Stream the response')

    subparsers.add_parser('list-models', help='List available models')
    subparsers.add_parser('schema', help='Show accepted request parameters')

    args = parser.parse_args()

    if args.command == 'generate':
        return asyncio.run(generate_text(
            args.model,
            args.prompt,
            args.max_tokens,
            args.temperature,
            args.stream
        ))
    elif args.command == 'list-models':
        list_models()
    elif args.command == 'schema':
        show_schema()
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
