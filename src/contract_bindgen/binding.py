"""Invocation of the external binding generator."""

import logging
import subprocess
from pathlib import Path
from typing import Protocol, Union

from .constants import DEFAULT_ABIGEN
from .exceptions import BindingGenerationError

logger = logging.getLogger(__name__)


class BindingGenerator(Protocol):
    """Anything that turns a staged ABI and bytecode into language bindings."""

    def __call__(
        self, abi_file_path: Path, bytecode_file_path: Path, package_name: str, contract_name: str
    ) -> None: ...


class AbigenBindingGenerator:
    """Generates Go bindings by running abigen on the staged files."""

    def __init__(
        self,
        output_dir: Union[Path, str],
        abigen: str = DEFAULT_ABIGEN,
    ):
        """
        Args:
            output_dir: Directory receiving <lowercase name>.go bindings
            abigen: abigen executable name or path
        """
        self.output_dir = Path(output_dir)
        self.abigen = abigen

    def command(
        self, abi_file_path: Path, bytecode_file_path: Path, package_name: str, contract_name: str
    ) -> list[str]:
        output_file = self.output_dir / f"{contract_name.lower()}.go"
        return [
            self.abigen,
            "--abi",
            str(abi_file_path),
            "--bin",
            str(bytecode_file_path),
            "--pkg",
            package_name,
            "--type",
            contract_name,
            "--out",
            str(output_file),
        ]

    def __call__(
        self, abi_file_path: Path, bytecode_file_path: Path, package_name: str, contract_name: str
    ) -> None:
        """
        Run abigen for one contract.

        Raises:
            BindingGenerationError: If abigen is missing or exits non-zero
        """
        cmd = self.command(abi_file_path, bytecode_file_path, package_name, contract_name)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Running %s", " ".join(cmd))

        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise BindingGenerationError(
                f"Binding generator {self.abigen!r} not found while generating {contract_name}"
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise BindingGenerationError(
                f"Failed to generate bindings for {contract_name} from {abi_file_path}: {stderr}"
            ) from e
