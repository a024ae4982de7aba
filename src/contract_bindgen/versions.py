"""Compiler version handling for artifact names."""

from .constants import COMPILER_VERSION_RE


def strip_compiler_version(name: str) -> str:
    """
    Remove embedded compiler versions from an artifact base name.

    Forge appends the compiler version to artifacts compiled with more than
    one solc version, e.g. "Proxy.0.8.15" for Proxy.sol.

    Args:
        name: Artifact file name without the .json extension

    Returns:
        Name with every ".X.Y.Z" version removed
    """
    return COMPILER_VERSION_RE.sub("", name)
