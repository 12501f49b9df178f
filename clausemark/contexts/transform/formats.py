"""
Format Registry

Loads format descriptors from formats.yaml (or CLAUSEMARK_FORMATS_PATH) and
caches them.

Example:
    >>> format_descriptor("commonmark").file_format
    'json'
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from clausemark.contexts.transform.exceptions import UnknownFormatError

load_dotenv()
DEFAULT_FORMATS_PATH = Path(__file__).parent / "formats.yaml"
FORMATS_PATH = Path(os.getenv("CLAUSEMARK_FORMATS_PATH", str(DEFAULT_FORMATS_PATH)))

FILE_FORMATS = ("json", "utf8", "binary")
KINDS = ("tree", "text", "binary")


@dataclass(frozen=True)
class FormatDescriptor:
    """
    Description of one format.

    Attributes:
        name: Format name used in conversion chains
        docs: One-line description
        file_format: On-disk serialization (json, utf8, binary)
        kind: What the pipeline passes between hops (tree, text, binary)
    """

    name: str
    docs: str
    file_format: str
    kind: str


class FormatRegistry:
    """Registry for loading and caching format descriptors."""

    def __init__(self, formats_path: Path = None):
        """
        Initialize the format registry.

        Args:
            formats_path: YAML file declaring the formats. Defaults to
                          CLAUSEMARK_FORMATS_PATH from environment
        """
        if formats_path is None:
            formats_path = FORMATS_PATH

        self.formats_path = formats_path
        self._cache: Optional[Dict[str, FormatDescriptor]] = None

    def _load(self) -> Dict[str, FormatDescriptor]:
        if self._cache is not None:
            return self._cache

        if not self.formats_path.exists():
            raise FileNotFoundError(f"Format registry not found: {self.formats_path}")

        raw = OmegaConf.to_container(OmegaConf.load(self.formats_path), resolve=True)

        descriptors = {}
        for name, entry in raw.items():
            if entry.get("file_format") not in FILE_FORMATS:
                raise ValueError(f"Format '{name}' has invalid file_format {entry.get('file_format')!r}")
            if entry.get("kind") not in KINDS:
                raise ValueError(f"Format '{name}' has invalid kind {entry.get('kind')!r}")
            descriptors[name] = FormatDescriptor(
                name=name,
                docs=entry.get("docs", ""),
                file_format=entry["file_format"],
                kind=entry["kind"],
            )

        self._cache = descriptors
        return descriptors

    def get(self, name: str) -> FormatDescriptor:
        """
        Get a format descriptor by name.

        Raises:
            UnknownFormatError: If the format is not declared
        """
        descriptors = self._load()
        if name not in descriptors:
            raise UnknownFormatError(name)
        return descriptors[name]

    def names(self) -> List[str]:
        return sorted(self._load())

    def clear_cache(self):
        """Clear the descriptor cache."""
        self._cache = None


_registry = FormatRegistry()


def format_descriptor(name: str) -> FormatDescriptor:
    """
    Look up a format in the default registry.

    Raises:
        UnknownFormatError: If the format is not declared
    """
    return _registry.get(name)


def format_names() -> List[str]:
    return _registry.names()
