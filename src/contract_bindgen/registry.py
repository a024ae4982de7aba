"""Registry of generated contract metadata."""

import importlib
import pkgutil
from types import ModuleType
from typing import Any, Dict, List

from .constants import METADATA_FILE_SUFFIX
from .exceptions import ContractNotFoundError


class MetadataRegistry:
    """
    Lookup tables for deployed bytecode, storage layouts and source maps.

    Generated metadata modules expose register(registry) instead of mutating
    package globals at import time. The consuming application builds one
    registry at startup and populates it explicitly:

        registry = MetadataRegistry()
        registry.load_package("myapp.bindings")
    """

    def __init__(self) -> None:
        self._deployed_bytecodes: Dict[str, str] = {}
        self._layouts: Dict[str, Dict[str, Any]] = {}
        self._source_maps: Dict[str, str] = {}

    def register_deployed_bytecode(self, contract_name: str, deployed_bin: str) -> None:
        self._deployed_bytecodes[contract_name] = deployed_bin

    def register_storage_layout(self, contract_name: str, layout: Dict[str, Any]) -> None:
        self._layouts[contract_name] = layout

    def register_source_map(self, contract_name: str, source_map: str) -> None:
        self._source_maps[contract_name] = source_map

    def register_module(self, module: ModuleType) -> None:
        """
        Register a generated metadata module.

        Args:
            module: Module exposing register(registry)

        Raises:
            TypeError: If the module has no register function
        """
        register = getattr(module, "register", None)
        if not callable(register):
            raise TypeError(f"Module {module.__name__} has no register(registry) function")
        register(self)

    def load_package(self, package_name: str) -> List[str]:
        """
        Import and register every generated *_more module of a package.

        Args:
            package_name: Dotted name of the package holding generated modules

        Returns:
            Names of the registered modules, sorted
        """
        package = importlib.import_module(package_name)
        module_names = sorted(
            info.name
            for info in pkgutil.iter_modules(package.__path__)
            if info.name.endswith(METADATA_FILE_SUFFIX)
        )
        for module_name in module_names:
            self.register_module(importlib.import_module(f"{package_name}.{module_name}"))
        return module_names

    def has_contract(self, contract_name: str) -> bool:
        """
        Check if a contract's deployed bytecode is registered.

        Args:
            contract_name: Name of contract

        Returns:
            True if registered, False otherwise
        """
        return contract_name in self._deployed_bytecodes

    def contract_names(self) -> List[str]:
        """Names of all contracts with registered bytecode, sorted."""
        return sorted(self._deployed_bytecodes)

    def deployed_bytecode(self, contract_name: str) -> str:
        """
        Get a contract's deployed bytecode.

        Raises:
            ContractNotFoundError: If the contract is not registered
        """
        if contract_name not in self._deployed_bytecodes:
            raise ContractNotFoundError(f"No deployed bytecode registered for {contract_name!r}")
        return self._deployed_bytecodes[contract_name]

    def storage_layout(self, contract_name: str) -> Dict[str, Any]:
        """
        Get a contract's canonical storage layout.

        Raises:
            ContractNotFoundError: If no layout is registered (e.g. Etherscan contracts)
        """
        if contract_name not in self._layouts:
            raise ContractNotFoundError(f"No storage layout registered for {contract_name!r}")
        return self._layouts[contract_name]

    def source_map(self, contract_name: str) -> str:
        """
        Get a contract's deployed source map.

        Raises:
            ContractNotFoundError: If no source map is registered
        """
        if contract_name not in self._source_maps:
            raise ContractNotFoundError(f"No source map registered for {contract_name!r}")
        return self._source_maps[contract_name]
