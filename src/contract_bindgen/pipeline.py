"""Binding and metadata generation pipeline."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Protocol, Sequence, Tuple, Union

import requests

from .artifacts import get_contract_artifact_paths, read_forge_artifact
from .binding import AbigenBindingGenerator, BindingGenerator
from .config import BindgenConfig
from .constants import DEFAULT_METADATA_EXTENSION, ETHERSCAN_METADATA_TEMPLATE, LOCAL_METADATA_TEMPLATE
from .contracts_list import read_etherscan_contracts_list, read_local_contracts_list
from .etherscan import EtherscanClient
from .exceptions import (
    ArtifactParseError,
    BindgenError,
    ConfigurationError,
    ContractListError,
    PipelineError,
)
from .metadata import load_metadata_template, write_contract_metadata
from .staging import make_temp_artifacts_dir, remove_temp_artifacts_dir, write_contract_artifacts
from .storage_layout import canonicalize_storage_layout, parse_source_maps_list
from .types import ContractMetadata, EtherscanContract, ResolvedContract

logger = logging.getLogger(__name__)


class MetadataProvider(Protocol):
    """Source-specific half of the pipeline: resolution and metadata shape."""

    kind: str
    template_name: str

    def contract_name(self, contract: Any) -> str: ...

    def resolve(self, contract: Any) -> ResolvedContract: ...

    def build_metadata(self, resolved: ResolvedContract, package_name: str) -> ContractMetadata: ...


class EtherscanMetadataProvider:
    """Resolves contracts through the Etherscan API."""

    kind = "Etherscan"
    template_name = ETHERSCAN_METADATA_TEMPLATE

    def __init__(self, client: EtherscanClient):
        self.client = client

    def contract_name(self, contract: EtherscanContract) -> str:
        return contract.name

    def resolve(self, contract: EtherscanContract) -> ResolvedContract:
        abi = self.client.fetch_abi(contract.name, contract.deployed_address)
        bytecode = self.client.fetch_bytecode(contract.name, contract.deployed_address)
        return ResolvedContract(
            name=contract.name,
            abi=abi,
            bytecode=bytecode,
            deployed_bytecode=bytecode,
        )

    def build_metadata(self, resolved: ResolvedContract, package_name: str) -> ContractMetadata:
        return ContractMetadata(
            name=resolved.name,
            package=package_name,
            deployed_bin=resolved.deployed_bytecode,
        )


class LocalMetadataProvider:
    """Resolves contracts from a forge artifacts directory."""

    kind = "local"
    template_name = LOCAL_METADATA_TEMPLATE

    def __init__(
        self,
        forge_artifacts: Union[Path, str],
        monorepo_base: str,
        source_maps_set: FrozenSet[str],
        contract_artifact_paths: Dict[str, Path],
    ):
        self.forge_artifacts = Path(forge_artifacts)
        self.monorepo_base = monorepo_base
        self.source_maps_set = source_maps_set
        self.contract_artifact_paths = contract_artifact_paths

    def contract_name(self, contract: str) -> str:
        return contract

    def resolve(self, contract: str) -> ResolvedContract:
        artifact = read_forge_artifact(
            self.forge_artifacts, contract, self.contract_artifact_paths
        )
        return ResolvedContract(
            name=contract,
            abi=json.dumps(artifact.abi),
            bytecode=artifact.bytecode,
            deployed_bytecode=artifact.deployed_bytecode,
            artifact=artifact,
        )

    def build_metadata(self, resolved: ResolvedContract, package_name: str) -> ContractMetadata:
        if resolved.artifact is None:
            raise ArtifactParseError(
                f"No forge artifact was resolved for local contract {resolved.name!r}"
            )
        storage_layout, deployed_source_map = canonicalize_storage_layout(
            resolved.artifact, self.monorepo_base, self.source_maps_set, resolved.name
        )
        return ContractMetadata(
            name=resolved.name,
            package=package_name,
            deployed_bin=resolved.deployed_bytecode,
            storage_layout=storage_layout,
            deployed_source_map=deployed_source_map,
        )


def generate_bindings(
    contracts: Sequence[Any],
    provider: MetadataProvider,
    binding_generator: BindingGenerator,
    package_name: str,
    metadata_output_dir: Union[Path, str],
    metadata_extension: str = DEFAULT_METADATA_EXTENSION,
    fail_fast: bool = True,
) -> List[Path]:
    """
    Generate bindings and metadata for each contract, one at a time, in order.

    For every contract: resolve ABI and bytecode, stage them in a temporary
    directory, run the binding generator, then render and write metadata.
    The temporary directory is removed once the run ends, whatever the outcome.

    Args:
        contracts: Contracts understood by the provider
        provider: Etherscan or local metadata provider
        binding_generator: Callable producing bindings from staged files
        package_name: Package of the generated bindings
        metadata_output_dir: Directory for the metadata files
        metadata_extension: Metadata file extension
        fail_fast: Stop at the first failing contract. When False, every
                   contract is attempted and failures are reported together.

    Returns:
        Paths of the written metadata files, in contract order

    Raises:
        BindgenError: The first failure, when fail_fast
        PipelineError: Every failure, when not fail_fast
    """
    template = load_metadata_template(provider.template_name)
    written: List[Path] = []
    failures: List[Tuple[str, BindgenError]] = []

    temp_artifacts_dir = make_temp_artifacts_dir()
    try:
        for contract in contracts:
            contract_name = provider.contract_name(contract)
            logger.info(
                "Generating bindings and metadata for %s contract: %s", provider.kind, contract_name
            )
            try:
                resolved = provider.resolve(contract)
                abi_file_path, bytecode_file_path = write_contract_artifacts(
                    temp_artifacts_dir,
                    contract_name,
                    resolved.abi.encode(),
                    resolved.bytecode.encode(),
                )
                binding_generator(abi_file_path, bytecode_file_path, package_name, contract_name)
                contract_metadata = provider.build_metadata(resolved, package_name)
                written.append(
                    write_contract_metadata(
                        contract_metadata, metadata_output_dir, template, metadata_extension
                    )
                )
            except BindgenError as e:
                if fail_fast:
                    raise
                logger.error("Failed to generate %s: %s", contract_name, e)
                failures.append((contract_name, e))
    finally:
        remove_temp_artifacts_dir(temp_artifacts_dir)

    if failures:
        raise PipelineError(failures)
    return written


def _default_binding_generator(config: BindgenConfig) -> BindingGenerator:
    return AbigenBindingGenerator(config.bindings_output_dir, config.abigen)


def gen_etherscan_bindings(
    config: BindgenConfig,
    binding_generator: Optional[BindingGenerator] = None,
    session: Optional[requests.Session] = None,
) -> List[Path]:
    """
    Generate bindings and metadata for the Etherscan contracts in the contracts list.

    Args:
        config: Run configuration (needs etherscan_api_key)
        binding_generator: Defaults to abigen writing into bindings_output_dir
        session: Optional requests session for the Etherscan client

    Returns:
        Paths of the written metadata files

    Raises:
        ConfigurationError: If the list is empty or the API key is missing
        BindgenError: If any contract fails (see generate_bindings)
    """
    contracts = read_etherscan_contracts_list(config.contracts_list)
    if not contracts:
        raise ContractListError(
            f"No contracts parsable from given contract list: {config.contracts_list}"
        )
    if not config.etherscan_api_key:
        raise ConfigurationError("An Etherscan API key is required for Etherscan contracts")

    client = EtherscanClient(
        api_key=config.etherscan_api_key,
        api_url=config.etherscan_api_url,
        max_retries=config.api_max_retries,
        retry_delay=config.api_retry_delay,
        session=session,
    )
    return generate_bindings(
        contracts,
        EtherscanMetadataProvider(client),
        binding_generator or _default_binding_generator(config),
        config.package_name,
        config.metadata_output_dir,
        config.metadata_extension,
        config.fail_fast,
    )


def gen_local_bindings(
    config: BindgenConfig,
    binding_generator: Optional[BindingGenerator] = None,
) -> List[Path]:
    """
    Generate bindings and metadata for the local contracts in the contracts list.

    Args:
        config: Run configuration (needs forge_artifacts)
        binding_generator: Defaults to abigen writing into bindings_output_dir

    Returns:
        Paths of the written metadata files

    Raises:
        ConfigurationError: If the list is empty or forge_artifacts is unset
        ArtifactCollisionError: If strict_artifact_names and names collide
        BindgenError: If any contract fails (see generate_bindings)
    """
    contracts = read_local_contracts_list(config.contracts_list)
    if not contracts:
        raise ContractListError(
            f"No contracts parsable from given contract list: {config.contracts_list}"
        )
    if config.forge_artifacts is None:
        raise ConfigurationError("A forge artifacts directory is required for local contracts")

    contract_artifact_paths = get_contract_artifact_paths(
        config.forge_artifacts, strict=config.strict_artifact_names
    )
    provider = LocalMetadataProvider(
        config.forge_artifacts,
        config.monorepo_base,
        parse_source_maps_list(config.source_maps_list),
        contract_artifact_paths,
    )
    return generate_bindings(
        contracts,
        provider,
        binding_generator or _default_binding_generator(config),
        config.package_name,
        config.metadata_output_dir,
        config.metadata_extension,
        config.fail_fast,
    )
