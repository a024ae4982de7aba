"""Response and artifact parsers for contract-bindgen."""

import json
from typing import Any, Dict

from .types import ForgeArtifact


def parse_etherscan_api_response(body: str) -> Dict[str, str]:
    """
    Parse an Etherscan status envelope.

    Args:
        body: Response body text

    Returns:
        Dictionary with "status", "message" and "result" strings.
        Missing fields are returned as empty strings.

    Raises:
        ValueError: If the body is not JSON, not an object, or a field is not a string
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    result: Dict[str, str] = {}
    for key in ("status", "message", "result"):
        value = data.get(key, "")
        if not isinstance(value, str):
            raise ValueError(f"field {key!r} is not a string: {value!r}")
        result[key] = value
    return result


def parse_etherscan_rpc_response(body: str) -> Dict[str, Any]:
    """
    Parse an Etherscan proxy (JSON-RPC) envelope.

    The result is not validated; an empty string or "0x" is accepted.

    Args:
        body: Response body text

    Returns:
        Dictionary with "jsonrpc", "id" and "result"

    Raises:
        ValueError: If the body is not JSON, not an object, or result is not a string
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    result = data.get("result", "")
    if not isinstance(result, str):
        raise ValueError(f"field 'result' is not a string: {result!r}")

    return {
        "jsonrpc": data.get("jsonrpc", ""),
        "id": data.get("id", 0),
        "result": result,
    }


def _bytecode_object(data: Dict[str, Any], key: str) -> str:
    section = data.get(key)
    if section is None:
        return ""
    if not isinstance(section, dict):
        raise ValueError(f"field {key!r} is not an object")
    obj = section.get("object", "")
    if not isinstance(obj, str):
        raise ValueError(f"field '{key}.object' is not a string")
    return obj


def parse_forge_artifact(data: Any) -> ForgeArtifact:
    """
    Build a ForgeArtifact from decoded forge artifact JSON.

    Args:
        data: Decoded artifact JSON

    Returns:
        ForgeArtifact with ABI, bytecode objects, deployed source map
        and raw storage layout (empty when the artifact has none)

    Raises:
        ValueError: If a field has an unexpected type
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    abi = data.get("abi", [])
    if not isinstance(abi, list):
        raise ValueError("field 'abi' is not a list")

    deployed = data.get("deployedBytecode") or {}
    source_map = deployed.get("sourceMap", "") if isinstance(deployed, dict) else ""
    if not isinstance(source_map, str):
        raise ValueError("field 'deployedBytecode.sourceMap' is not a string")

    storage_layout = data.get("storageLayout") or {}
    if not isinstance(storage_layout, dict):
        raise ValueError("field 'storageLayout' is not an object")

    return ForgeArtifact(
        abi=abi,
        bytecode=_bytecode_object(data, "bytecode"),
        deployed_bytecode=_bytecode_object(data, "deployedBytecode"),
        deployed_source_map=source_map,
        storage_layout=storage_layout,
    )
