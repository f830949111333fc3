"""Version lookup for the image_processing application."""

from importlib import metadata
import json
from os import PathLike
from pathlib import Path
import sys

PACKAGE_NAME = "image_processing"
DISTRIBUTION_NAME = "image-processing"
VERSION_FILENAME = "version.json"
FALLBACK_VERSION = "0.1.0"


def get_embedded_path(name: str | PathLike[str]) -> Path:
    """Return the path to an embedded resource shipped with the binary."""

    base = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))
    return base / Path(name)


def get_version() -> str:
    """
    Get version for application.

    Frozen builds read the ``version.json`` written by ``scripts/build_exe.py``;
    installed copies ask the distribution metadata; a bare checkout asks
    setuptools_scm.

    :return: Version number.
    """
    if getattr(sys, "frozen", False):  # *.exe
        with open(get_embedded_path(VERSION_FILENAME), "r") as f:
            return str(json.load(f)["version"])

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        pass

    import setuptools_scm  # type: ignore[import-untyped]

    root = Path(__file__).resolve().parents[2]
    return str(
        setuptools_scm.get_version(root=str(root), fallback_version=FALLBACK_VERSION)
    )


__all__ = ["get_version", "get_embedded_path"]
