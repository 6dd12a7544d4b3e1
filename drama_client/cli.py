"""CLI entry point for the drama client."""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from .api.client import DramaAPIClient
from .api.resources import AIConfigAPI
from .config.settings import ClientConfig
from .errors import ClientError
from .observability.logging import configure_logging


def _parse_params(pairs: List[str]) -> Dict[str, str]:
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        params[key] = value
    return params


async def send_request(config: ClientConfig, method: str, url: str, body: Any = None,
                       params: Optional[Dict[str, str]] = None, retry: Optional[int] = None) -> int:
    """Send one call and print the unwrapped data as JSON."""
    async with DramaAPIClient(config) as client:
        try:
            result = await client.request(method, url, body, params=params, retry_limit=retry)
        except ClientError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


async def list_configs(config: ClientConfig, service_type: Optional[str] = None) -> int:
    """List AI service configurations."""
    async with DramaAPIClient(config) as client:
        try:
            configs = await AIConfigAPI(client).list(service_type)
        except ClientError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    print("AI Service Configs:")
    print("-" * 50)
    for item in configs:
        status = "✓" if item.is_active else "✗"
        default = " (default)" if item.is_default else ""
        print(f"{status} [{item.id}] {item.name}{default}")
        print(f"   {item.service_type.value} / {item.provider} @ {item.base_url}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Drama API client CLI")
    parser.add_argument('--base-url', help='Backend origin (overrides DRAMA_API_BASE_URL)')
    parser.add_argument('--log-level', help='Log level (overrides DRAMA_API_LOG_LEVEL)')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    request_parser = subparsers.add_parser('request', help='Send a request to the API')
    request_parser.add_argument('method', help='HTTP method (GET, POST, ...)')
    request_parser.add_argument('url', help='Route relative to the API root, e.g. /ai-configs')
    request_parser.add_argument('--data', help='JSON request body')
    request_parser.add_argument('--param', action='append', default=[], help='Query parameter KEY=VALUE')
    request_parser.add_argument('--retry', type=int, help='Maximum additional attempts')

    list_parser = subparsers.add_parser('list-configs', help='List AI service configurations')
    list_parser.add_argument('--service-type', choices=['text', 'image', 'video'])

    args = parser.parse_args(argv)

    overrides = {}
    if args.base_url:
        overrides['base_url'] = args.base_url
    if args.log_level:
        overrides['log_level'] = args.log_level
    try:
        config = ClientConfig.from_env(**overrides)
    except ClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(config.log_level)

    if args.command == 'request':
        try:
            params = _parse_params(args.param)
        except ValueError as e:
            parser.error(str(e))
        try:
            body = json.loads(args.data) if args.data else None
        except json.JSONDecodeError as e:
            parser.error(f"--data is not valid JSON: {e}")
        return asyncio.run(send_request(config, args.method, args.url, body, params, args.retry))
    elif args.command == 'list-configs':
        return asyncio.run(list_configs(config, args.service_type))
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
