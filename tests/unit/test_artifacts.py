"""Unit tests for forge artifact discovery and loading."""

from pathlib import Path

import pytest

from contract_bindgen.artifacts import get_contract_artifact_paths, read_forge_artifact
from contract_bindgen.exceptions import (
    ArtifactCollisionError,
    ArtifactNotFoundError,
    ArtifactParseError,
)


class TestGetContractArtifactPaths:
    """Test the get_contract_artifact_paths function."""

    def test_indexes_json_files_by_name(self, write_artifact, tmp_path: Path):
        """Test that every JSON artifact is keyed by its base name."""
        bridge = write_artifact("L1Bridge.sol/L1Bridge.json")
        portal = write_artifact("OptimismPortal.sol/OptimismPortal.json")
        (tmp_path / "forge-artifacts" / "build-info").mkdir()
        (tmp_path / "forge-artifacts" / "build-info" / "notes.txt").write_text("ignored")

        paths = get_contract_artifact_paths(tmp_path / "forge-artifacts")

        assert paths == {"L1Bridge": bridge, "OptimismPortal": portal}

    def test_strips_compiler_version(self, write_artifact, tmp_path: Path):
        """Test that Name.X.Y.Z.json is indexed as Name."""
        proxy = write_artifact("Proxy.sol/Proxy.0.8.15.json")

        paths = get_contract_artifact_paths(tmp_path / "forge-artifacts")

        assert paths == {"Proxy": proxy}

    def test_last_path_wins_on_collision(self, write_artifact, tmp_path: Path):
        """Test that the lexicographically last path is kept for a shared name."""
        write_artifact("A.sol/Proxy.0.8.15.json")
        later = write_artifact("Z.sol/Proxy.0.8.19.json")

        paths = get_contract_artifact_paths(tmp_path / "forge-artifacts")

        assert paths["Proxy"] == later

    def test_collision_tie_break_ignores_creation_order(self, write_artifact, tmp_path: Path):
        """Test that the tie-break depends on path order, not on when files were written."""
        later = write_artifact("Z.sol/Proxy.json")
        write_artifact("A.sol/Proxy.json")

        paths = get_contract_artifact_paths(tmp_path / "forge-artifacts")

        assert paths["Proxy"] == later

    def test_nested_directories_sort_by_components(self, write_artifact, tmp_path: Path):
        """Test that deeper paths are ordered component by component."""
        write_artifact("lib/a/Proxy.json")
        later = write_artifact("lib/b/Proxy.json")

        paths = get_contract_artifact_paths(tmp_path / "forge-artifacts")

        assert paths["Proxy"] == later

    def test_strict_mode_rejects_collisions(self, write_artifact, tmp_path: Path):
        """Test that strict mode fails loudly naming both artifacts."""
        first = write_artifact("A.sol/Proxy.json")
        second = write_artifact("B.sol/Proxy.json")

        with pytest.raises(ArtifactCollisionError) as exc_info:
            get_contract_artifact_paths(tmp_path / "forge-artifacts", strict=True)

        assert str(first) in str(exc_info.value)
        assert str(second) in str(exc_info.value)

    def test_empty_directory(self, tmp_path: Path):
        """Test that an empty directory yields an empty index."""
        assert get_contract_artifact_paths(tmp_path) == {}


class TestReadForgeArtifact:
    """Test the read_forge_artifact function."""

    def test_reads_standard_path(self, forge_artifacts_dir: Path):
        """Test that the conventional <name>.sol/<name>.json location is used."""
        artifact = read_forge_artifact(forge_artifacts_dir, "L1Bridge", {})

        assert artifact.deployed_bytecode == "0x6080604052600080fdfea164736f6c6343"

    def test_standard_path_preferred_over_index(self, write_artifact, tmp_path: Path):
        """Test that the index is not consulted when the standard path exists."""
        write_artifact("L1Bridge.sol/L1Bridge.json")
        other = write_artifact(
            "other/L1Bridge.json", deployedBytecode={"object": "0xdead", "sourceMap": ""}
        )

        artifact = read_forge_artifact(
            tmp_path / "forge-artifacts", "L1Bridge", {"L1Bridge": other}
        )

        assert artifact.deployed_bytecode == "0x6080604052600080fdfea164736f6c6343"

    def test_falls_back_to_index(self, write_artifact, tmp_path: Path):
        """Test that a missing standard path falls back to the index."""
        write_artifact(
            "Proxy.sol/Proxy.0.8.15.json", deployedBytecode={"object": "0xbeef", "sourceMap": ""}
        )
        root = tmp_path / "forge-artifacts"

        artifact = read_forge_artifact(root, "Proxy", get_contract_artifact_paths(root))

        assert artifact.deployed_bytecode == "0xbeef"

    def test_missing_artifact_raises(self, tmp_path: Path):
        """Test that an unknown contract raises ArtifactNotFoundError naming it."""
        with pytest.raises(ArtifactNotFoundError, match="Missing") as exc_info:
            read_forge_artifact(tmp_path, "Missing", {})

        assert str(tmp_path / "Missing.sol" / "Missing.json") in str(exc_info.value)

    def test_missing_indexed_artifact_names_both_paths(self, tmp_path: Path):
        """Test that a stale index entry is reported alongside the standard path."""
        stale = tmp_path / "lib" / "Gone.json"

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            read_forge_artifact(tmp_path, "Gone", {"Gone": stale})

        assert str(tmp_path / "Gone.sol" / "Gone.json") in str(exc_info.value)
        assert str(stale) in str(exc_info.value)

    def test_reads_utf8_artifact(self, write_artifact, tmp_path: Path):
        """Test that non-ASCII text in an artifact is decoded as UTF-8."""
        path = write_artifact("Token.sol/Token.json")
        text = path.read_text(encoding="utf-8").replace('"deposit"', '"dépôt"')
        path.write_bytes(text.encode("utf-8"))

        artifact = read_forge_artifact(tmp_path / "forge-artifacts", "Token", {})

        assert artifact.abi[0]["name"] == "dépôt"

    def test_malformed_artifact_raises(self, tmp_path: Path):
        """Test that invalid JSON raises ArtifactParseError naming contract and path."""
        path = tmp_path / "Broken.sol" / "Broken.json"
        path.parent.mkdir()
        path.write_text("{ not json")

        with pytest.raises(ArtifactParseError) as exc_info:
            read_forge_artifact(tmp_path, "Broken", {})

        assert "Broken" in str(exc_info.value)
        assert str(path) in str(exc_info.value)
