"""
contract-bindgen: contract binding and metadata generation from Etherscan and forge artifacts
"""

from importlib.metadata import PackageNotFoundError, version

from .config import BindgenConfig
from .exceptions import (
    ArtifactCollisionError,
    ArtifactNotFoundError,
    ArtifactParseError,
    ArtifactWriteError,
    BindgenError,
    BindingGenerationError,
    ConfigurationError,
    ContractListError,
    ContractNotFoundError,
    EtherscanError,
    EtherscanRequestError,
    EtherscanResponseError,
    MetadataWriteError,
    PipelineError,
    RateLimitExceededError,
)
from .pipeline import (
    EtherscanMetadataProvider,
    LocalMetadataProvider,
    gen_etherscan_bindings,
    gen_local_bindings,
    generate_bindings,
)
from .registry import MetadataRegistry
from .types import ContractMetadata, ContractsList, EtherscanContract, ForgeArtifact

try:
    __version__ = version("contract-bindgen")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "BindgenConfig",
    "gen_etherscan_bindings",
    "gen_local_bindings",
    "generate_bindings",
    "EtherscanMetadataProvider",
    "LocalMetadataProvider",
    "MetadataRegistry",
    "ContractMetadata",
    "ContractsList",
    "EtherscanContract",
    "ForgeArtifact",
    "BindgenError",
    "ConfigurationError",
    "ContractListError",
    "EtherscanError",
    "EtherscanRequestError",
    "EtherscanResponseError",
    "RateLimitExceededError",
    "ArtifactNotFoundError",
    "ArtifactParseError",
    "ArtifactCollisionError",
    "ArtifactWriteError",
    "BindingGenerationError",
    "MetadataWriteError",
    "ContractNotFoundError",
    "PipelineError",
]
