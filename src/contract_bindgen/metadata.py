"""Rendering and writing of per-contract metadata files."""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from .constants import DEFAULT_METADATA_EXTENSION
from .exceptions import MetadataWriteError
from .paths import get_metadata_file_path
from .types import ContractMetadata

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def get_template_environment() -> Environment:
    """
    Create the jinja2 environment for the bundled metadata templates.

    Values embedded in generated code go through the pyrepr filter, which
    emits them as Python literals so they round-trip verbatim.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["pyrepr"] = repr
    return env


def load_metadata_template(template_name: str) -> Template:
    """
    Load one of the bundled metadata templates.

    Args:
        template_name: ETHERSCAN_METADATA_TEMPLATE or LOCAL_METADATA_TEMPLATE

    Returns:
        Compiled template
    """
    return get_template_environment().get_template(template_name)


def render_contract_metadata(contract_metadata: ContractMetadata, template: Template) -> str:
    """Render a template against a contract's metadata."""
    return template.render(**asdict(contract_metadata))


def write_contract_metadata(
    contract_metadata: ContractMetadata,
    metadata_output_dir: Union[Path, str],
    template: Template,
    extension: str = DEFAULT_METADATA_EXTENSION,
) -> Path:
    """
    Render a contract's metadata and write it to <output>/<name>_more<ext>.

    An existing file is truncated. The template is rendered before the file
    is opened, so a render failure leaves a previous file untouched.

    Args:
        contract_metadata: Metadata to render
        metadata_output_dir: Output directory, created if missing
        template: Template from load_metadata_template()
        extension: Output file extension

    Returns:
        Path of the written file

    Raises:
        MetadataWriteError: If rendering or writing fails
    """
    name = contract_metadata.name
    metadata_file_path = get_metadata_file_path(metadata_output_dir, name, extension)

    try:
        content = render_contract_metadata(contract_metadata, template)
    except TemplateError as e:
        raise MetadataWriteError(
            f"Error writing {name}'s contract metadata at {metadata_file_path}: {e}"
        ) from e

    try:
        metadata_file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(metadata_file_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise MetadataWriteError(
            f"Error opening {name}'s metadata file at {metadata_file_path}: {e}"
        ) from e

    logger.info("Wrote %s's contract metadata to: %s", name, metadata_file_path)
    return metadata_file_path
