"""Storage layout canonicalization for contract-bindgen.

solc assigns AST ids in compilation order, so the same contract compiled
alongside different sources gets different ids in its storage layout. The
functions here replace those ids with values derived only from the layout
itself, so regenerating bindings never produces spurious diffs.
"""

import itertools
import json
import posixpath
import re
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Tuple

from .constants import CANONICAL_AST_ID_START
from .exceptions import ArtifactParseError
from .types import ForgeArtifact

# User defined types carry their declaration's AST id, e.g. t_struct(Foo)1234_storage.
# Fixed array lengths (t_array(t_uint256)3_storage) are not ids and never match.
USER_DEFINED_TYPE_RE = re.compile(
    r"(t_(?:struct|enum|contract|userDefinedValueType)\([\w.]+\))(\d+)"
)


def parse_source_maps_list(source_maps_list: str) -> FrozenSet[str]:
    """
    Split a comma separated list of contract names into a set.

    Args:
        source_maps_list: e.g. "MIPS,PreimageOracle"

    Returns:
        Set of names, empty when the string is empty
    """
    return frozenset(name.strip() for name in source_maps_list.split(",") if name.strip())


def _type_tokens(type_ids: Iterable[str]) -> Dict[str, Tuple[str, int]]:
    tokens: Dict[str, Tuple[str, int]] = {}
    for type_id in type_ids:
        for match in USER_DEFINED_TYPE_RE.finditer(type_id or ""):
            tokens[match.group(0)] = (match.group(1), int(match.group(2)))
    return tokens


def _strip_ids(type_id: str) -> str:
    return USER_DEFINED_TYPE_RE.sub(r"\1", type_id or "")


def _token_sort_key(
    token: str,
    prefix: str,
    types: Dict[str, Dict[str, Any]],
    storage: List[Dict[str, Any]],
) -> Tuple[Any, ...]:
    """Order a type token by what it declares, never by its raw AST id."""
    declarations = sorted(
        (type_id for type_id in types if type_id == token or type_id.startswith(f"{token}_")),
        key=_strip_ids,
    )
    label = ""
    members: Tuple[Tuple[str, str, int, str], ...] = ()
    if declarations:
        declaration = types[declarations[0]]
        label = declaration.get("label", "")
        members = tuple(
            (
                member.get("label", ""),
                _strip_ids(member.get("type", "")),
                member.get("offset", 0),
                member.get("slot", "0"),
            )
            for member in declaration.get("members") or []
        )

    # Same-named types with identical shape are told apart by where storage first uses them
    first_use = next(
        (
            index
            for index, entry in enumerate(storage)
            if token in _type_tokens([entry.get("type", "")])
        ),
        len(storage),
    )
    return (prefix, label, members, first_use)


def _relative_contract(contract: str, base_path: str) -> str:
    # Absolute paths appear when two imported contracts share a name
    if base_path and posixpath.isabs(contract):
        contract = contract.replace(base_path, "", 1)
        if contract.startswith("/"):
            contract = contract[1:]
    return contract


def _canonical_entry(
    entry: Dict[str, Any],
    ast_id: int,
    replace_type: Callable[[str], str],
    base_path: str,
) -> Dict[str, Any]:
    return {
        "astId": ast_id,
        "contract": _relative_contract(entry.get("contract", ""), base_path),
        "label": entry.get("label", ""),
        "offset": entry.get("offset", 0),
        "slot": entry.get("slot", "0"),
        "type": replace_type(entry.get("type", "")),
    }


def canonicalize_ast_ids(layout: Dict[str, Any], base_path: str) -> Dict[str, Any]:
    """
    Replace compiler assigned AST ids in a storage layout with canonical ones.

    Ids are handed out sequentially from 1000: first to storage variables in
    slot order, then to user defined types sorted by kind, declared label and member
    shape, then to struct members in the order of their containing types.
    The result is a pure function of (layout, base_path) and does not depend
    on the raw ids the compiler assigned.

    Args:
        layout: Raw storage layout {"storage": [...], "types": {...}}
        base_path: Prefix stripped from absolute contract source paths

    Returns:
        Canonical layout with the same structure
    """
    storage = layout.get("storage") or []
    types = layout.get("types") or {}
    next_id = itertools.count(CANONICAL_AST_ID_START)

    storage_ids = [next(next_id) for _ in storage]

    tokens = _type_tokens(list(types) + [entry.get("type", "") for entry in storage])
    token_remappings: Dict[str, str] = {}
    ordered_tokens = sorted(
        tokens.items(),
        key=lambda item: (_token_sort_key(item[0], item[1][0], types, storage), item[1][1]),
    )
    for token, (prefix, _) in ordered_tokens:
        token_remappings[token] = f"{prefix}{next(next_id)}"

    def replace_type(type_id: str) -> str:
        if not type_id:
            return type_id
        return USER_DEFINED_TYPE_RE.sub(
            lambda m: token_remappings.get(m.group(0), m.group(0)), type_id
        )

    canonical_types: Dict[str, Dict[str, Any]] = {}
    for old_type in sorted(types, key=lambda t: (replace_type(t), t)):
        value = types[old_type]
        canonical: Dict[str, Any] = {
            "encoding": value.get("encoding", ""),
            "label": value.get("label", ""),
            "numberOfBytes": value.get("numberOfBytes", ""),
        }
        for key in ("key", "value", "base"):
            if value.get(key):
                canonical[key] = replace_type(value[key])
        if value.get("members"):
            canonical["members"] = [
                _canonical_entry(member, next(next_id), replace_type, base_path)
                for member in value["members"]
            ]
        canonical_types[replace_type(old_type)] = canonical

    return {
        "storage": [
            _canonical_entry(entry, ast_id, replace_type, base_path)
            for entry, ast_id in zip(storage, storage_ids)
        ],
        "types": canonical_types,
    }


def serialize_storage_layout(layout: Dict[str, Any]) -> str:
    """
    Serialize a canonical layout as compact JSON escaped for a string literal.

    Args:
        layout: Canonical storage layout

    Returns:
        JSON text with backslashes and double quotes escaped
    """
    encoded = json.dumps(layout, sort_keys=True, separators=(",", ":"))
    return encoded.replace("\\", "\\\\").replace('"', '\\"')


def canonicalize_storage_layout(
    forge_artifact: ForgeArtifact,
    base_path: str,
    source_maps_set: FrozenSet[str],
    contract_name: str,
) -> Tuple[str, str]:
    """
    Canonicalize an artifact's storage layout and pick its deployed source map.

    Args:
        forge_artifact: Parsed forge artifact
        base_path: Monorepo base path used to relativize contract sources
        source_maps_set: Contract names whose source maps are embedded
        contract_name: Name of the contract being processed

    Returns:
        Tuple of (canonical_storage_layout, deployed_source_map) where the
        source map is empty unless contract_name is in source_maps_set

    Raises:
        ArtifactParseError: If the storage layout has an unexpected shape
    """
    try:
        canonical = canonicalize_ast_ids(forge_artifact.storage_layout, base_path)
    except (AttributeError, TypeError, ValueError) as e:
        raise ArtifactParseError(
            f"Malformed storage layout in forge artifact of {contract_name!r}: {e}"
        ) from e

    deployed_source_map = ""
    if contract_name in source_maps_set:
        deployed_source_map = forge_artifact.deployed_source_map

    return serialize_storage_layout(canonical), deployed_source_map
