"""Build the deployable zip for the register-user Lambda."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
import shutil
import subprocess
import sys
import zipfile

logger = logging.getLogger(__name__)

TARGET_PLATFORM = "manylinux_2_17_aarch64"
TARGET_IMPLEMENTATION = "cp"
TARGET_PYTHON_VERSION = "3.12"
FUNCTION_NAME = "register_user"
ARTIFACT_NAME = "register-user.zip"


def _ensure_python_version() -> None:
    if sys.version_info[:2] != (3, 12):
        raise SystemExit("Python 3.12 is required to build Lambda bundles.")


def _run_pip(command: list[str], cwd: Path) -> None:
    env = os.environ.copy()
    env["PYTHONDONTWRITEBYTECODE"] = "1"
    subprocess.run(command, check=True, cwd=cwd, env=env)


def _copy_tree(source: Path, destination: Path) -> None:
    if not source.exists():
        raise FileNotFoundError(f"Missing source path: {source}")
    shutil.copytree(source, destination, dirs_exist_ok=True)


def _remove_tree(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)


def _cleanup_bundle(output_dir: Path) -> None:
    for cache_dir in list(output_dir.rglob("__pycache__")):
        shutil.rmtree(cache_dir)
    for pattern in ("*.pyc", "*.pyo"):
        for cache_file in output_dir.rglob(pattern):
            cache_file.unlink()


def install_dependencies(source_root: Path, staging_dir: Path) -> None:
    requirements = source_root / "requirements.txt"
    if not requirements.is_file():
        raise FileNotFoundError(f"Missing requirements file: {requirements}")

    logger.info("Installing Lambda Python dependencies...")
    _run_pip(
        [
            sys.executable,
            "-m",
            "pip",
            "install",
            "-r",
            str(requirements),
            "-t",
            str(staging_dir),
            "--no-compile",
            "--platform",
            TARGET_PLATFORM,
            "--only-binary=:all:",
            "--implementation",
            TARGET_IMPLEMENTATION,
            "--python-version",
            TARGET_PYTHON_VERSION,
        ],
        cwd=source_root,
    )


def stage_sources(source_root: Path, staging_dir: Path) -> None:
    """Copy the function entrypoint and the app package into *staging_dir*.

    The entrypoint lands at ``handler.py`` and the package at ``app/`` so
    the Lambda handler setting is ``handler.lambda_handler``.
    """
    _copy_tree(source_root / "lambda" / FUNCTION_NAME, staging_dir)
    _copy_tree(source_root / "src" / "app", staging_dir / "app")
    _cleanup_bundle(staging_dir)


def write_zip(staging_dir: Path, zip_path: Path) -> int:
    """Zip the contents of *staging_dir* and return the archive size."""
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(staging_dir.rglob("*")):
            if path.is_file():
                archive.write(path, path.relative_to(staging_dir).as_posix())
    return zip_path.stat().st_size


def build_bundle(
    source_root: Path,
    staging_dir: Path,
    zip_path: Path,
    skip_deps: bool = False,
) -> int:
    _remove_tree(staging_dir)
    staging_dir.mkdir(parents=True, exist_ok=True)
    if not skip_deps:
        install_dependencies(source_root, staging_dir)
    stage_sources(source_root, staging_dir)
    return write_zip(staging_dir, zip_path)


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.1f}{unit}"
        value /= 1024
    return f"{value:.1f}GB"


def _parse_args() -> argparse.Namespace:
    source_root = Path(__file__).resolve().parents[1]
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--source-root",
        default=str(source_root),
        help="Path to backend source root.",
    )
    parser.add_argument(
        "--output-dir",
        default="",
        help="Staging directory for the bundle contents.",
    )
    parser.add_argument(
        "--zip-path",
        default=str(source_root.parent / "build" / ARTIFACT_NAME),
        help="Where to write the deployable zip.",
    )
    parser.add_argument(
        "--skip-deps",
        action="store_true",
        help="Bundle sources only; dependencies come from a layer.",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args()
    _ensure_python_version()
    source_root = Path(args.source_root).resolve()
    staging_dir = (
        Path(args.output_dir).resolve()
        if args.output_dir
        else source_root / ".lambda-build" / FUNCTION_NAME
    )
    zip_path = Path(args.zip_path).resolve()

    logger.info("Building Lambda bundle in %s", staging_dir)
    size = build_bundle(source_root, staging_dir, zip_path, args.skip_deps)
    logger.info("Lambda bundle ready: %s (%s)", zip_path, _format_size(size))


if __name__ == "__main__":
    main()
