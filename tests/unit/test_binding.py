"""Unit tests for the abigen binding generator wrapper."""

import subprocess
from pathlib import Path

import pytest

from contract_bindgen.binding import AbigenBindingGenerator
from contract_bindgen.exceptions import BindingGenerationError


class TestAbigenBindingGenerator:
    """Test the AbigenBindingGenerator class."""

    def test_command(self, tmp_path: Path):
        """Test the abigen invocation for one contract."""
        generator = AbigenBindingGenerator(tmp_path / "bindings", abigen="/usr/bin/abigen")

        cmd = generator.command(
            Path("/tmp/x/L1Bridge.abi"), Path("/tmp/x/L1Bridge.bin"), "bindings", "L1Bridge"
        )

        assert cmd == [
            "/usr/bin/abigen",
            "--abi",
            "/tmp/x/L1Bridge.abi",
            "--bin",
            "/tmp/x/L1Bridge.bin",
            "--pkg",
            "bindings",
            "--type",
            "L1Bridge",
            "--out",
            str(tmp_path / "bindings" / "l1bridge.go"),
        ]

    def test_runs_subprocess(self, tmp_path: Path, monkeypatch):
        """Test that abigen is run with check=True and the output dir is created."""
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            return subprocess.CompletedProcess(cmd, 0, "", "")

        monkeypatch.setattr("contract_bindgen.binding.subprocess.run", fake_run)
        generator = AbigenBindingGenerator(tmp_path / "bindings")

        generator(tmp_path / "A.abi", tmp_path / "A.bin", "bindings", "A")

        assert len(calls) == 1
        assert calls[0][1]["check"] is True
        assert (tmp_path / "bindings").is_dir()

    def test_failure_raises_with_stderr(self, tmp_path: Path, monkeypatch):
        """Test that a non-zero exit raises BindingGenerationError with stderr."""

        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd, output="", stderr="invalid ABI\n")

        monkeypatch.setattr("contract_bindgen.binding.subprocess.run", fake_run)
        generator = AbigenBindingGenerator(tmp_path / "bindings")

        with pytest.raises(BindingGenerationError) as exc_info:
            generator(tmp_path / "A.abi", tmp_path / "A.bin", "bindings", "A")

        assert "invalid ABI" in str(exc_info.value)
        assert "A.abi" in str(exc_info.value)

    def test_missing_executable_raises(self, tmp_path: Path):
        """Test that a missing abigen binary raises BindingGenerationError."""
        generator = AbigenBindingGenerator(tmp_path, abigen=str(tmp_path / "no-such-abigen"))

        with pytest.raises(BindingGenerationError, match="not found"):
            generator(tmp_path / "A.abi", tmp_path / "A.bin", "bindings", "A")
