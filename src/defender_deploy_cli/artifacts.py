"""Build artifact and ABI file loading for defender-deploy-cli."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from .exceptions import ArtifactDecodeError, ArtifactFieldError, ArtifactReadError

logger = logging.getLogger(__name__)

# Fields of a build-info file sent as the deployment artifact payload
BUILD_INFO_FIELDS = ("input", "output")


def load_json_file(file_path: Union[Path, str]) -> Any:
    """
    Read a file as UTF-8 text and parse it as JSON.

    Args:
        file_path: Path to the JSON file

    Returns:
        The decoded JSON document

    Raises:
        ArtifactReadError: If the file cannot be read
        ArtifactDecodeError: If the file is not valid JSON
    """
    logger.debug("Reading artifact file %s", file_path)
    try:
        with open(file_path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactReadError(f"Could not read file {file_path}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ArtifactDecodeError(f"File {file_path} is not valid JSON: {e}") from e


def to_compact_json(value: Any) -> str:
    """Serialize a JSON fragment without insignificant whitespace."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def extract_fields(
    document: Any, fields: Sequence[str], file_path: Union[Path, str]
) -> Dict[str, Any]:
    """
    Pick named top-level fields out of a decoded artifact.

    Args:
        document: Decoded JSON document
        fields: Field names to extract, all required
        file_path: Source path, used in error messages

    Returns:
        Dictionary with the requested fields in the order given

    Raises:
        ArtifactFieldError: If the document is not an object or a field is missing
    """
    if not isinstance(document, dict):
        raise ArtifactFieldError(f"File {file_path} does not contain a JSON object")

    missing = [name for name in fields if name not in document]
    if missing:
        raise ArtifactFieldError(
            f"File {file_path} is missing required field(s): {', '.join(missing)}"
        )

    return {name: document[name] for name in fields}


def load_abi(abi_file: Optional[Union[Path, str]]) -> Optional[str]:
    """
    Load the ABI from an artifact file as a compact JSON string.

    Args:
        abi_file: Path to a file with an ``abi`` field, or None to skip

    Returns:
        Compact JSON of the ``abi`` field, or None if no file was given
    """
    if abi_file is None:
        return None

    fragment = extract_fields(load_json_file(abi_file), ("abi",), abi_file)
    return to_compact_json(fragment["abi"])


def load_build_info(artifact_file: Union[Path, str]) -> str:
    """
    Load compiler input and output from a build-info file.

    Args:
        artifact_file: Path to a Hardhat or Foundry build-info file

    Returns:
        Compact JSON object holding only the ``input`` and ``output`` fields
    """
    fragment = extract_fields(load_json_file(artifact_file), BUILD_INFO_FIELDS, artifact_file)
    return to_compact_json(fragment)
