"""Custom exception classes for contract-bindgen."""

from typing import List, Tuple


class BindgenError(Exception):
    """Base exception for binding generation errors."""

    pass


class ConfigurationError(BindgenError, ValueError):
    """Raised when the run configuration is incomplete or invalid."""

    pass


class ContractListError(ConfigurationError):
    """Raised when the contract list is unreadable, malformed or empty."""

    pass


class EtherscanError(BindgenError, RuntimeError):
    """Base exception for Etherscan API failures."""

    pass


class EtherscanRequestError(EtherscanError):
    """Raised when an Etherscan request fails at the transport or HTTP level."""

    pass


class EtherscanResponseError(EtherscanError):
    """Raised when an Etherscan response is malformed or reports a failure."""

    pass


class RateLimitExceededError(EtherscanError):
    """Raised when every retry attempt hit the Etherscan rate limit."""

    pass


class ArtifactNotFoundError(BindgenError, FileNotFoundError):
    """Raised when no forge artifact exists for a contract."""

    pass


class ArtifactParseError(BindgenError, ValueError):
    """Raised when a forge artifact cannot be parsed."""

    pass


class ArtifactCollisionError(BindgenError, ValueError):
    """Raised in strict mode when two artifacts share a sanitized name."""

    pass


class ArtifactWriteError(BindgenError, OSError):
    """Raised when ABI or bytecode cannot be staged for the binding generator."""

    pass


class BindingGenerationError(BindgenError, RuntimeError):
    """Raised when the external binding generator fails."""

    pass


class MetadataWriteError(BindgenError, OSError):
    """Raised when a contract metadata file cannot be rendered or written."""

    pass


class ContractNotFoundError(BindgenError, KeyError):
    """Raised when a contract is not present in a metadata registry."""

    def __str__(self) -> str:
        # KeyError repr()s its argument, keep the plain message instead
        return str(self.args[0]) if self.args else ""


class PipelineError(BindgenError):
    """Raised after a collecting run when one or more contracts failed."""

    def __init__(self, failures: List[Tuple[str, BindgenError]]):
        self.failures = failures
        names = ", ".join(name for name, _ in failures)
        super().__init__(f"Failed to generate bindings for {len(failures)} contract(s): {names}")
