"CDDB/freedb disc metadata file parser."

from importlib import metadata

from .disc import Disc
from .lines import LineStore
from .models import CddbFileError, FormatError, Track

__all__ = [
    "CddbFileError",
    "Disc",
    "FormatError",
    "LineStore",
    "Track",
    "__version__",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("cddb-file")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
