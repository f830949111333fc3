"""Build the image_processing executable with PyInstaller."""

from __future__ import annotations

import json
import os
from pathlib import Path
import re
import subprocess
import sys
from tempfile import TemporaryDirectory

BASE_DIR = Path(__file__).resolve().parent.parent
ENTRY_POINT = BASE_DIR / "src/image_processing/app.py"
APP_NAME = "image_processing"

_SAFE = re.compile(r"[^A-Za-z0-9.-]+")


def _safe_version(version: str) -> str:
    cleaned = _SAFE.sub("-", version).strip("-")
    return cleaned or "unknown"


def _project_version() -> str:
    import setuptools_scm  # type: ignore[import-untyped]

    return str(setuptools_scm.get_version(root=BASE_DIR, fallback_version="0.1.0"))


def main() -> None:
    version = _project_version()
    executable_name = f"{APP_NAME}-v{_safe_version(version)}"
    data_sep = ";" if os.name == "nt" else ":"

    with TemporaryDirectory() as tmp:
        # read back by image_processing._version.get_version in frozen builds
        version_json = Path(tmp) / "version.json"
        version_json.write_text(json.dumps({"version": version}, indent=4), "utf-8")

        cmd = [
            "pyinstaller",
            "--noconsole",
            "--onefile",
            "--name",
            executable_name,
            "--clean",
            "--paths",
            str(BASE_DIR / "src"),
            "--add-data",
            f"{version_json}{data_sep}.",
            str(ENTRY_POINT),
        ]
        print(" ".join(cmd))
        sys.exit(subprocess.call(cmd))


if __name__ == "__main__":
    main()
