"""Forge artifact discovery and loading for contract-bindgen."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .exceptions import ArtifactCollisionError, ArtifactNotFoundError, ArtifactParseError
from .parsers import parse_forge_artifact
from .paths import get_standard_artifact_path
from .types import ForgeArtifact
from .versions import strip_compiler_version

logger = logging.getLogger(__name__)


def get_contract_artifact_paths(
    forge_artifacts: Union[Path, str], strict: bool = False
) -> Dict[str, Path]:
    """
    Index every JSON artifact under a directory by sanitized contract name.

    Contracts sharing a name are compiled to artifacts whose location depends
    on their import path. Files are visited in sorted order of their path
    components relative to the root, and a later path replaces an earlier one
    with the same sanitized name: the last lexicographic path wins.

    Args:
        forge_artifacts: Root of the forge artifacts directory
        strict: Raise instead of applying the tie-break when names collide

    Returns:
        Dictionary mapping sanitized contract name -> artifact path

    Raises:
        ArtifactCollisionError: If strict and two artifacts share a name
    """
    root = Path(forge_artifacts)
    candidates = sorted(
        (p for p in root.rglob("*.json") if p.is_file()),
        key=lambda p: p.relative_to(root).parts,
    )

    artifact_paths: Dict[str, Path] = {}
    for path in candidates:
        name = strip_compiler_version(path.stem)
        previous = artifact_paths.get(name)
        if previous is not None:
            if strict:
                raise ArtifactCollisionError(
                    f"Ambiguous forge artifacts for {name!r}: {previous} and {path}"
                )
            logger.debug("Artifact %s for %r replaces %s", path, name, previous)
        artifact_paths[name] = path

    return artifact_paths


def read_forge_artifact(
    forge_artifacts: Union[Path, str],
    contract_name: str,
    contract_artifact_paths: Dict[str, Path],
) -> ForgeArtifact:
    """
    Locate and parse a contract's forge artifact.

    The conventional path <root>/<name>.sol/<name>.json is tried first,
    then the precomputed artifact index.

    Args:
        forge_artifacts: Root of the forge artifacts directory
        contract_name: Name of the contract
        contract_artifact_paths: Index from get_contract_artifact_paths()

    Returns:
        Parsed ForgeArtifact

    Raises:
        ArtifactNotFoundError: If neither location holds an artifact
        ArtifactParseError: If the artifact cannot be read or parsed
    """
    standard_path = get_standard_artifact_path(forge_artifacts, contract_name)
    artifact_path: Optional[Path] = standard_path
    if not standard_path.is_file():
        fallback = contract_artifact_paths.get(contract_name)
        logger.info(
            "Cannot find forge artifact for %s at standard path %s, trying %s",
            contract_name,
            standard_path,
            fallback,
        )
        artifact_path = fallback
        if artifact_path is None or not artifact_path.is_file():
            tried = f"{standard_path}"
            if fallback is not None:
                tried += f" or {fallback}"
            else:
                tried += f" (no indexed artifact under {forge_artifacts})"
            raise ArtifactNotFoundError(
                f"Cannot find forge artifact of {contract_name!r}: tried {tried}"
            )

    logger.info("Using forge artifact %s", artifact_path)
    try:
        with open(artifact_path, encoding="utf-8") as f:
            data = json.load(f)
        return parse_forge_artifact(data)
    except (OSError, ValueError) as e:
        raise ArtifactParseError(
            f"Failed to parse forge artifact of {contract_name!r} at {artifact_path}: {e}"
        ) from e
