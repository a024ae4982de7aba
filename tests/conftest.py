"""Shared pytest fixtures for contract-bindgen tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

MONOREPO_BASE = "/home/ci/monorepo/packages/contracts"


class RecordingBindingGenerator:
    """Binding generator stand-in that records calls and staged file contents."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, str, str]] = []
        self.staged_dirs: List[Path] = []

    def __call__(
        self, abi_file_path: Path, bytecode_file_path: Path, package_name: str, contract_name: str
    ) -> None:
        self.staged_dirs.append(abi_file_path.parent)
        self.calls.append(
            (
                contract_name,
                package_name,
                abi_file_path.read_text(),
                bytecode_file_path.read_text(),
            )
        )


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def forge_artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the sample forge artifacts directory."""
    return fixtures_dir / "forge-artifacts"


@pytest.fixture
def l1_bridge_artifact_json(forge_artifacts_dir: Path) -> Dict[str, Any]:
    """Load and return the sample L1Bridge forge artifact."""
    with open(forge_artifacts_dir / "L1Bridge.sol" / "L1Bridge.json") as f:
        return json.load(f)


@pytest.fixture
def sample_storage_layout(l1_bridge_artifact_json: Dict[str, Any]) -> Dict[str, Any]:
    """Return the raw storage layout of the sample artifact."""
    return l1_bridge_artifact_json["storageLayout"]


@pytest.fixture
def contracts_list_path(fixtures_dir: Path) -> Path:
    """Return path to the sample contracts list."""
    return fixtures_dir / "contracts_list.json"


@pytest.fixture
def write_contracts_list(tmp_path: Path):
    """Write a contracts list into tmp_path and return its path."""

    def _write(local: List[str] = (), etherscan: List[Dict[str, str]] = ()) -> Path:
        path = tmp_path / "contracts_list.json"
        path.write_text(json.dumps({"local": list(local), "etherscan": list(etherscan)}))
        return path

    return _write


@pytest.fixture
def write_artifact(tmp_path: Path, l1_bridge_artifact_json: Dict[str, Any]):
    """Write a copy of the sample artifact at a path relative to tmp_path/forge-artifacts."""

    def _write(relative_path: str, **overrides: Any) -> Path:
        path = tmp_path / "forge-artifacts" / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        data = dict(l1_bridge_artifact_json, **overrides)
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def binding_generator() -> RecordingBindingGenerator:
    """Return a binding generator that only records its inputs."""
    return RecordingBindingGenerator()


@pytest.fixture
def monorepo_base() -> str:
    """Return the base path the sample artifact's absolute sources live under."""
    return MONOREPO_BASE
