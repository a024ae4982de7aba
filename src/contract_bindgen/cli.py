"""Command line entry point for contract-bindgen."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import BindgenConfig
from .constants import DEFAULT_ABIGEN, DEFAULT_METADATA_EXTENSION
from .exceptions import BindgenError
from .pipeline import gen_etherscan_bindings, gen_local_bindings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contract-bindgen",
        description="Generate contract bindings and metadata from Etherscan or forge artifacts",
    )
    parser.add_argument(
        "mode",
        choices=("etherscan", "local", "all"),
        help="Which contracts from the list to generate",
    )
    parser.add_argument("--contracts-list", required=True, type=Path, help="Contracts list JSON")
    parser.add_argument("--package", required=True, help="Package name of the generated bindings")
    parser.add_argument(
        "--metadata-out", required=True, type=Path, help="Directory for generated metadata files"
    )
    parser.add_argument(
        "--bindings-out", type=Path, default=None, help="Directory for generated bindings"
    )
    parser.add_argument(
        "--source-maps", default="", help="Comma separated contracts whose source maps are embedded"
    )
    parser.add_argument("--etherscan-api-key", default=None, help="Defaults to $ETHERSCAN_API_KEY")
    parser.add_argument("--etherscan-api-url", default=None, help="Defaults to $ETHERSCAN_API_URL")
    parser.add_argument("--api-max-retries", type=int, default=None)
    parser.add_argument("--api-retry-delay", type=float, default=None, help="Seconds")
    parser.add_argument("--forge-artifacts", type=Path, default=None)
    parser.add_argument("--monorepo-base", default="", help="Base path stripped from sources")
    parser.add_argument(
        "--strict-artifact-names",
        action="store_true",
        help="Fail when two artifacts share a contract name instead of using the last one",
    )
    parser.add_argument("--abigen", default=DEFAULT_ABIGEN, help="abigen executable")
    parser.add_argument("--metadata-extension", default=DEFAULT_METADATA_EXTENSION)
    parser.add_argument(
        "--collect-errors",
        action="store_true",
        help="Attempt every contract and report all failures instead of stopping at the first",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> BindgenConfig:
    return BindgenConfig.from_env(
        contracts_list=args.contracts_list,
        package_name=args.package,
        metadata_output_dir=args.metadata_out,
        bindings_output_dir=args.bindings_out,
        source_maps_list=args.source_maps,
        etherscan_api_key=args.etherscan_api_key,
        etherscan_api_url=args.etherscan_api_url,
        api_max_retries=args.api_max_retries,
        api_retry_delay=args.api_retry_delay,
        forge_artifacts=args.forge_artifacts,
        monorepo_base=args.monorepo_base,
        strict_artifact_names=args.strict_artifact_names,
        abigen=args.abigen,
        metadata_extension=args.metadata_extension,
        fail_fast=not args.collect_errors,
    )


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
        if args.mode in ("local", "all"):
            gen_local_bindings(config)
        if args.mode in ("etherscan", "all"):
            gen_etherscan_bindings(config)
    except BindgenError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
