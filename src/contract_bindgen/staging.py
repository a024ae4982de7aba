"""Temporary staging of ABI and bytecode files for the binding generator."""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Tuple, Union

from .constants import ABI_FILE_SUFFIX, BYTECODE_FILE_SUFFIX, TEMP_ARTIFACTS_DIR_PREFIX
from .exceptions import ArtifactWriteError

logger = logging.getLogger(__name__)


def make_temp_artifacts_dir() -> Path:
    """Create the per-run directory that holds staged artifacts."""
    return Path(tempfile.mkdtemp(prefix=TEMP_ARTIFACTS_DIR_PREFIX))


def remove_temp_artifacts_dir(temp_dir: Union[Path, str]) -> None:
    """
    Remove the staging directory, logging instead of raising on failure.

    Args:
        temp_dir: Directory created by make_temp_artifacts_dir()
    """
    try:
        shutil.rmtree(temp_dir)
    except OSError as e:
        logger.error("Error removing temporary directory %s: %s", temp_dir, e)
    else:
        logger.info("Successfully removed temporary directory %s", temp_dir)


def write_contract_artifacts(
    temp_dir: Union[Path, str], contract_name: str, abi: bytes, bytecode: bytes
) -> Tuple[Path, Path]:
    """
    Write a contract's ABI and bytecode where the binding generator can read them.

    Args:
        temp_dir: Staging directory
        contract_name: Name of the contract
        abi: ABI JSON bytes
        bytecode: Hex bytecode bytes

    Returns:
        Tuple of (abi_file_path, bytecode_file_path)

    Raises:
        ArtifactWriteError: If either file cannot be written
    """
    abi_file_path = Path(temp_dir) / f"{contract_name}{ABI_FILE_SUFFIX}"
    bytecode_file_path = Path(temp_dir) / f"{contract_name}{BYTECODE_FILE_SUFFIX}"

    for file_path, content in ((abi_file_path, abi), (bytecode_file_path, bytecode)):
        try:
            file_path.write_bytes(content)
        except OSError as e:
            raise ArtifactWriteError(
                f"Error writing {contract_name}'s artifact to {file_path}: {e}"
            ) from e

    return abi_file_path, bytecode_file_path
