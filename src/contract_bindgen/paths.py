"""Path management utilities for contract-bindgen."""

from pathlib import Path
from typing import Union

from .constants import DEFAULT_METADATA_EXTENSION, METADATA_FILE_SUFFIX


def get_standard_artifact_path(forge_artifacts: Union[Path, str], contract_name: str) -> Path:
    """
    Get the conventional forge artifact path for a contract.

    Args:
        forge_artifacts: Root of the forge artifacts directory
        contract_name: Name of the contract

    Returns:
        Path to <forge_artifacts>/<name>.sol/<name>.json
    """
    return Path(forge_artifacts) / f"{contract_name}.sol" / f"{contract_name}.json"


def get_metadata_file_path(
    output_dir: Union[Path, str],
    contract_name: str,
    extension: str = DEFAULT_METADATA_EXTENSION,
) -> Path:
    """
    Get the metadata output path for a contract.

    The contract name is lowercased, so "L1Bridge" becomes "l1bridge_more.py".

    Args:
        output_dir: Metadata output directory
        contract_name: Name of the contract
        extension: File extension, with or without the leading dot

    Returns:
        Path to <output_dir>/<lowercase name>_more<extension>
    """
    if extension and not extension.startswith("."):
        extension = f".{extension}"
    return Path(output_dir) / f"{contract_name.lower()}{METADATA_FILE_SUFFIX}{extension}"
