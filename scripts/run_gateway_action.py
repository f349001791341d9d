#!/usr/bin/env python3
"""
Send a single action to the payment gateway and print the normalized result.

Examples:
  python scripts/run_gateway_action.py --action tappay.refund --params '{"rec_trade_id": "D2020..."}'
  python scripts/run_gateway_action.py --action currency.exchangeRate \
      --params '{"from": "USD", "to": "TWD", "from_amount": 10, "type": "up", "point": 3}'
  python scripts/run_gateway_action.py --file license=docs/license.pdf \
      --partner-account acme --platform-key pk_123
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add repo root to path so `paygate.*` imports work when running from scripts/
sys.path.insert(0, str(Path(__file__).parent.parent))

from paygate.integrations.clients.real_http.gateway import PaymentGatewayClient
from paygate.integrations.uploads.resolvers import StoredPathResolver


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def parse_files(values: List[str]) -> Dict[str, str]:
    files: Dict[str, str] = {}
    for value in values:
        field, sep, path = value.partition("=")
        if not sep or not field or not path:
            raise ValueError(f"--file expects field=path, got {value!r}")
        files[field] = path
    return files


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Call one payment gateway action and print the normalized result")
    parser.add_argument("--action", help="Registered action name, e.g. tappay.refund")
    parser.add_argument("--params", default="{}", help="JSON object with the action parameters")
    parser.add_argument(
        "--file",
        action="append",
        default=[],
        help="Qualification file as field=path (repeatable); switches to upload mode",
    )
    parser.add_argument("--partner-account", default="", help="Partner account for uploads")
    parser.add_argument("--platform-key", default="", help="Platform key for uploads")
    parser.add_argument(
        "--upload-root",
        type=Path,
        default=Path("."),
        help="Directory that --file paths are relative to (default: current directory)",
    )
    parser.add_argument("--env-file", type=Path, default=None, help="Optional .env file with PAYGATE_* settings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Optional log file")

    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    try:
        params = json.loads(args.params)
        if not isinstance(params, dict):
            raise ValueError("--params must be a JSON object")
        files = parse_files(args.file)
        if not files and not args.action:
            raise ValueError("either --action or at least one --file is required")

        client = PaymentGatewayClient.from_env(args.env_file, resolver=StoredPathResolver(args.upload_root))
        if files:
            logger.info("Uploading %d file(s) for %s", len(files), args.partner_account)
            result = asyncio.run(client.upload(files, args.partner_account, args.platform_key))
        else:
            logger.info("Dispatching %s", args.action)
            result = asyncio.run(client.dispatch(args.action, params))

        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return 0 if result.success else 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Exception as e:
        logger.error("Error calling gateway: %s: %s", type(e).__name__, str(e), exc_info=args.verbose)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
