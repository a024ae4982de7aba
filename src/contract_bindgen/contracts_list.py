"""Contract list loading for contract-bindgen."""

import json
from pathlib import Path
from typing import Any, List, Union

from .exceptions import ContractListError
from .types import ContractsList, EtherscanContract


def _parse_etherscan_contract(entry: Any, index: int) -> EtherscanContract:
    if not isinstance(entry, dict):
        raise ValueError(f"etherscan[{index}] is not an object")

    name = entry.get("name")
    deployed_address = entry.get("deployedAddress")
    if not isinstance(name, str) or not name:
        raise ValueError(f"etherscan[{index}] is missing 'name'")
    if not isinstance(deployed_address, str) or not deployed_address:
        raise ValueError(f"etherscan[{index}] ({name}) is missing 'deployedAddress'")

    predeploy_address = entry.get("predeployAddress") or None
    return EtherscanContract(
        name=name,
        deployed_address=deployed_address,
        predeploy_address=predeploy_address,
    )


def read_contracts_list(file_path: Union[Path, str]) -> ContractsList:
    """
    Read and parse a contracts list file.

    Expected shape:
        {
          "local": ["L1Bridge", ...],
          "etherscan": [{"name": "WETH9", "deployedAddress": "0x...", "predeployAddress": "0x..."}]
        }

    Either sequence may be absent; an empty result is not an error here.

    Args:
        file_path: Path to the contracts list JSON

    Returns:
        ContractsList with both sequences

    Raises:
        ContractListError: If the file cannot be read or has the wrong shape
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ContractListError(f"Error reading contract list {file_path}: {e}") from e

    try:
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")

        etherscan_entries = data.get("etherscan") or []
        local_entries = data.get("local") or []
        if not isinstance(etherscan_entries, list) or not isinstance(local_entries, list):
            raise ValueError("'etherscan' and 'local' must be lists")

        etherscan = [
            _parse_etherscan_contract(entry, i) for i, entry in enumerate(etherscan_entries)
        ]
        local: List[str] = []
        for i, name in enumerate(local_entries):
            if not isinstance(name, str) or not name:
                raise ValueError(f"local[{i}] is not a contract name")
            local.append(name)
    except ValueError as e:
        raise ContractListError(f"Error reading contract list {file_path}: {e}") from e

    return ContractsList(etherscan=etherscan, local=local)


def read_etherscan_contracts_list(file_path: Union[Path, str]) -> List[EtherscanContract]:
    """Read only the Etherscan contract specs from a contracts list."""
    return read_contracts_list(file_path).etherscan


def read_local_contracts_list(file_path: Union[Path, str]) -> List[str]:
    """Read only the local contract names from a contracts list."""
    return read_contracts_list(file_path).local
