"""Data types and dataclasses for contract-bindgen."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class EtherscanContract:
    """A contract fetched from Etherscan, as listed in the contracts list."""

    name: str  # e.g., "WETH9"
    deployed_address: str  # Address queried on Etherscan
    predeploy_address: Optional[str] = None  # Fixed address in the target environment


@dataclass(frozen=True)
class ContractsList:
    """Parsed contracts list: remote contract specs and local contract names."""

    etherscan: List[EtherscanContract] = field(default_factory=list)
    local: List[str] = field(default_factory=list)


@dataclass
class ForgeArtifact:
    """The parts of a forge compiler artifact used for binding generation."""

    abi: List[Dict[str, Any]]
    bytecode: str  # bytecode.object
    deployed_bytecode: str  # deployedBytecode.object
    deployed_source_map: str = ""  # deployedBytecode.sourceMap
    storage_layout: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResolvedContract:
    """ABI and bytecode resolved for one contract, ready to be staged."""

    name: str
    abi: str  # JSON text
    bytecode: str  # Hex string handed to the binding generator
    deployed_bytecode: str
    artifact: Optional[ForgeArtifact] = None  # Only set for local contracts


@dataclass(frozen=True)
class ContractMetadata:
    """Values rendered into one generated metadata file."""

    name: str
    package: str
    deployed_bin: str
    storage_layout: Optional[str] = None  # Escaped canonical JSON, local contracts only
    deployed_source_map: str = ""
