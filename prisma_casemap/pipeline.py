"""
Pipeline driver.

Sequences parse -> transform -> render, and provides the file handling the
CLI needs around it: locating the schema, reading it and writing the result
back. Every run parses its own Schema; nothing is shared between runs.
"""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import DefaultConfig
from .exceptions import InputNotFoundError, OutputWriteError, raise_input_not_found
from .frontend import PrismaFrontend, SchemaFrontend
from .transformer import NamingTransformer, TransformOptions, TransformSummary

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    output: str
    summary: TransformSummary


class SchemaPipeline:
    """Runs the parse, rename and render stages over schema text."""

    def __init__(
        self,
        frontend: Optional[SchemaFrontend] = None,
        options: Optional[TransformOptions] = None,
    ):
        self.frontend = frontend or PrismaFrontend()
        self.options = options or TransformOptions()

    def process(self, raw_text: str) -> PipelineResult:
        """
        Run all three stages.

        Raises:
            SchemaParseError: If the text is not a valid schema. Nothing is
                rendered in that case.
        """
        logger.debug("Parsing schema text")
        schema = self.frontend.parse(raw_text)

        logger.debug("Renaming models, fields and indexes")
        summary = NamingTransformer(self.options).transform(schema)

        logger.debug("Rendering schema")
        output = self.frontend.render(schema)
        return PipelineResult(output=output, summary=summary)

    def run(self, raw_text: str) -> str:
        return self.process(raw_text).output


def run(
    raw_text: str,
    frontend: Optional[SchemaFrontend] = None,
    options: Optional[TransformOptions] = None,
) -> str:
    """Transform schema text and return the rendered result."""
    return SchemaPipeline(frontend, options).run(raw_text)


def find_schema_file(source: Optional[str] = None, search_paths: Optional[Sequence[str]] = None) -> Path:
    """
    Locate the schema file.

    Args:
        source: Explicit path given by the caller; when set no searching happens
        search_paths: Locations tried in order when no source is given

    Returns:
        Path of an existing schema file

    Raises:
        InputNotFoundError: If nothing usable exists
    """
    if source:
        path = Path(source)
        if not path.is_file():
            raise_input_not_found(f"schema file not found at {source}", searched_paths=[source])
        return path

    candidates: List[str] = list(search_paths or DefaultConfig.SEARCH_PATHS)
    for candidate in candidates:
        path = Path(candidate)
        if path.is_file():
            logger.debug(f"Found schema at {path}")
            return path

    raise InputNotFoundError(
        f"schema does not exist at {' or '.join(candidates)}",
        searched_paths=candidates,
    )


def load_schema_file(source: Optional[str] = None, search_paths: Optional[Sequence[str]] = None) -> str:
    """Read the schema text from an explicit path or the first conventional location."""
    path = find_schema_file(source, search_paths)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputNotFoundError(
            f"schema file at {path} could not be read: {e}",
            searched_paths=[str(path)],
        ) from e


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_output(text: str, destination: Path) -> None:
    """
    Write the rendered schema, replacing the destination atomically.

    Raises:
        OutputWriteError: If the file cannot be written
    """
    destination = Path(destination)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        if destination.exists():
            shutil.copymode(destination, tmp_name)
        else:
            # mkstemp creates 0600; a new file gets the usual umask-based mode
            os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, destination)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Could not write schema: {e}", destination=str(destination)) from e
    logger.debug(f"Wrote {len(text)} characters to {destination}")
