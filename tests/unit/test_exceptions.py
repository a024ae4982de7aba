"""Unit tests for custom exception classes."""

import pytest

from contract_bindgen.exceptions import (
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


class TestExceptionCatching:
    """Test that exceptions can be caught as their base types."""

    def test_catch_artifact_not_found_as_file_not_found_error(self):
        """Test that ArtifactNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            raise ArtifactNotFoundError("test")

    def test_catch_contract_list_error_as_configuration_error(self):
        """Test that ContractListError is a configuration error and a ValueError."""
        with pytest.raises(ConfigurationError):
            raise ContractListError("test")
        with pytest.raises(ValueError):
            raise ContractListError("test")

    def test_catch_etherscan_errors_as_runtime_error(self):
        """Test that Etherscan errors can be caught as EtherscanError and RuntimeError."""
        for exc_class in (EtherscanRequestError, EtherscanResponseError, RateLimitExceededError):
            with pytest.raises(EtherscanError):
                raise exc_class("test")
            with pytest.raises(RuntimeError):
                raise exc_class("test")

    def test_catch_write_errors_as_os_error(self):
        """Test that staging and metadata write errors can be caught as OSError."""
        with pytest.raises(OSError):
            raise ArtifactWriteError("test")
        with pytest.raises(OSError):
            raise MetadataWriteError("test")

    def test_catch_contract_not_found_as_key_error(self):
        """Test that ContractNotFoundError can be caught as KeyError."""
        with pytest.raises(KeyError):
            raise ContractNotFoundError("test")

    def test_catch_all_as_bindgen_error(self):
        """Test that all custom exceptions can be caught as BindgenError."""
        exceptions = [
            ConfigurationError("test"),
            ContractListError("test"),
            EtherscanRequestError("test"),
            EtherscanResponseError("test"),
            RateLimitExceededError("test"),
            ArtifactNotFoundError("test"),
            ArtifactParseError("test"),
            ArtifactCollisionError("test"),
            ArtifactWriteError("test"),
            BindingGenerationError("test"),
            MetadataWriteError("test"),
            ContractNotFoundError("test"),
        ]

        for exc in exceptions:
            with pytest.raises(BindgenError):
                raise exc


class TestExceptionCreation:
    """Test creating exceptions with various message types."""

    def test_exceptions_accept_string_messages(self):
        """Test that all exceptions keep their message as str()."""
        exceptions = [
            BindgenError,
            ConfigurationError,
            ContractListError,
            EtherscanRequestError,
            RateLimitExceededError,
            ArtifactNotFoundError,
            ArtifactParseError,
            MetadataWriteError,
            ContractNotFoundError,
        ]

        for exc_class in exceptions:
            exc = exc_class("test message")
            assert str(exc) == "test message"

    def test_pipeline_error_lists_failed_contracts(self):
        """Test that PipelineError keeps every failure and names them."""
        failures = [
            ("L1Bridge", ArtifactNotFoundError("missing")),
            ("WETH9", RateLimitExceededError("limited")),
        ]
        exc = PipelineError(failures)

        assert exc.failures == failures
        assert "2 contract(s)" in str(exc)
        assert "L1Bridge" in str(exc)
        assert "WETH9" in str(exc)
