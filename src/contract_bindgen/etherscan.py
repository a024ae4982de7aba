"""Etherscan API client for contract-bindgen."""

import logging
import time
from typing import Dict, Optional

import requests

from .constants import (
    DEFAULT_API_MAX_RETRIES,
    DEFAULT_API_RETRY_DELAY,
    DEFAULT_ETHERSCAN_API_URL,
    ETHERSCAN_REQUEST_TIMEOUT,
    OK_MESSAGE,
    RATE_LIMIT_MESSAGE,
    RATE_LIMIT_RESULT,
)
from .exceptions import (
    EtherscanRequestError,
    EtherscanResponseError,
    RateLimitExceededError,
)
from .parsers import parse_etherscan_api_response, parse_etherscan_rpc_response

logger = logging.getLogger(__name__)


def fetch_etherscan_data(
    url: str,
    params: Dict[str, str],
    session: Optional[requests.Session] = None,
    timeout: float = ETHERSCAN_REQUEST_TIMEOUT,
) -> str:
    """
    Send a GET request and return the response body.

    Args:
        url: Endpoint URL
        params: Query parameters (including the API key)
        session: Optional requests session to reuse connections
        timeout: Request timeout in seconds

    Returns:
        Response body text

    Raises:
        EtherscanRequestError: On network errors or a non-200 status
    """
    http = session if session is not None else requests
    try:
        response = http.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        message = str(e)
        api_key = params.get("apikey")
        if api_key:
            message = message.replace(api_key, "<redacted>")
        raise EtherscanRequestError(f"Network error during request to {url}: {message}") from e

    if response.status_code != 200:
        raise EtherscanRequestError(
            f"Request to {url} failed with status {response.status_code}"
        )

    return response.text


class EtherscanClient:
    """Fetches contract ABIs and deployed bytecode from Etherscan."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_ETHERSCAN_API_URL,
        max_retries: int = DEFAULT_API_MAX_RETRIES,
        retry_delay: float = DEFAULT_API_RETRY_DELAY,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Etherscan API key
            api_url: Etherscan API endpoint
            max_retries: Attempts made when the ABI request is rate limited
            retry_delay: Seconds to wait after a rate limited attempt
            session: Optional requests session
        """
        self.api_key = api_key
        self.api_url = api_url
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.session = session

    def fetch_abi(self, contract_name: str, address: str) -> str:
        """
        Fetch a verified contract's ABI.

        A rate limited response ("NOTOK" / "Max rate limit reached") is retried
        after retry_delay seconds, up to max_retries attempts in total. Any
        other failure is returned immediately.

        Args:
            contract_name: Contract name, used in log and error messages
            address: Deployed contract address

        Returns:
            The ABI as JSON text

        Raises:
            EtherscanRequestError: On transport failure
            EtherscanResponseError: On a malformed response or non-OK message
            RateLimitExceededError: If every attempt was rate limited
        """
        params = {
            "module": "contract",
            "action": "getabi",
            "address": address,
            "apikey": self.api_key,
        }

        for attempt in range(1, self.max_retries + 1):
            body = fetch_etherscan_data(self.api_url, params, self.session)

            try:
                api_response = parse_etherscan_api_response(body)
            except ValueError as e:
                raise EtherscanResponseError(
                    f"Failed to parse Etherscan ABI response for {contract_name} "
                    f"({address}) from {self.api_url}: {e}"
                ) from e

            if (
                api_response["message"] == RATE_LIMIT_MESSAGE
                and api_response["result"] == RATE_LIMIT_RESULT
            ):
                if attempt < self.max_retries:
                    logger.warning(
                        "Reached API rate limit fetching ABI for %s, waiting %ss and trying again (%d/%d)",
                        contract_name,
                        self.retry_delay,
                        attempt,
                        self.max_retries,
                    )
                    time.sleep(self.retry_delay)
                continue

            if api_response["message"] != OK_MESSAGE:
                raise EtherscanResponseError(
                    f"There was an issue with the Etherscan ABI request for {contract_name} "
                    f"({address}) to {self.api_url}, received response: {api_response}"
                )

            return api_response["result"]

        raise RateLimitExceededError(
            f"Failed to fetch ABI for {contract_name} ({address}) "
            f"after {self.max_retries} retries"
        )

    def fetch_bytecode(self, contract_name: str, address: str) -> str:
        """
        Fetch a contract's deployed bytecode via the eth_getCode proxy.

        Single request, no retry. The result is passed through unvalidated.

        Args:
            contract_name: Contract name, used in error messages
            address: Deployed contract address

        Returns:
            Hex-encoded deployed bytecode

        Raises:
            EtherscanRequestError: On transport failure
            EtherscanResponseError: On a malformed response
        """
        params = {
            "module": "proxy",
            "action": "eth_getCode",
            "address": address,
            "tag": "latest",
            "apikey": self.api_key,
        }
        body = fetch_etherscan_data(self.api_url, params, self.session)

        try:
            rpc_response = parse_etherscan_rpc_response(body)
        except ValueError as e:
            raise EtherscanResponseError(
                f"Failed to parse Etherscan bytecode response for {contract_name} "
                f"({address}) from {self.api_url}: {e}"
            ) from e

        return rpc_response["result"]
