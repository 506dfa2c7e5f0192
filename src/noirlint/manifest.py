"""
Nargo.toml manifest loading.

Only what the linter needs is read: the package metadata and the entry point
to analyze. Dependencies are parsed and validated but never resolved.

Example Nargo.toml:
    [package]
    name = "hello"
    type = "bin"
    compiler_version = ">=0.30.0"

    [dependencies]
    utils = { path = "../utils" }
    ec = { git = "https://github.com/noir-lang/ec", tag = "v0.1.0" }
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from noirlint.utils.errors import ManifestError

MANIFEST_FILENAME = "Nargo.toml"
DEFAULT_ENTRY = "src/main.nr"


class PackageType(Enum):
    BINARY = "bin"
    LIBRARY = "lib"
    CONTRACT = "contract"


@dataclass(frozen=True, slots=True)
class Dependency:
    """A `[dependencies]` entry: either a local path or a git tag."""

    name: str
    path: Optional[str] = None
    git: Optional[str] = None
    tag: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Package:
    """
    A Noir package described by a Nargo.toml manifest.

    Attributes:
        name: Package name
        package_type: bin, lib or contract
        root_dir: Directory containing the manifest
        entry_path: Source file to analyze, resolved against root_dir
        version: Optional package version
        compiler_version: Optional required compiler version
        dependencies: Declared dependencies, by name
    """

    name: str
    package_type: PackageType
    root_dir: Path
    entry_path: Path
    version: Optional[str] = None
    compiler_version: Optional[str] = None
    dependencies: dict[str, Dependency] = field(default_factory=dict)


def _optional_str(table: dict[str, Any], key: str, manifest_path: Path) -> Optional[str]:
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise ManifestError(f"'package.{key}' must be a string", manifest_path)
    return value


def _parse_dependency(name: str, raw: Any, manifest_path: Path) -> Dependency:
    if not isinstance(raw, dict):
        raise ManifestError(f"Dependency '{name}' must be a table", manifest_path)
    if "path" in raw:
        return Dependency(name, path=str(raw["path"]))
    if "git" in raw:
        if "tag" not in raw:
            raise ManifestError(f"Git dependency '{name}' is missing a 'tag'", manifest_path)
        return Dependency(name, git=str(raw["git"]), tag=str(raw["tag"]))
    raise ManifestError(f"Dependency '{name}' needs either 'path' or 'git'", manifest_path)


def parse_manifest(data: dict[str, Any], manifest_path: Path) -> Package:
    """
    Build a Package from already-decoded TOML data.

    Raises:
        ManifestError: If required fields are missing or invalid
    """
    package = data.get("package")
    if not isinstance(package, dict):
        raise ManifestError("Missing [package] table", manifest_path)

    name = package.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestError("'package.name' is required", manifest_path)

    raw_type = package.get("type")
    if raw_type is None:
        raise ManifestError("'package.type' is required", manifest_path)
    try:
        package_type = PackageType(raw_type)
    except ValueError:
        valid = ", ".join(t.value for t in PackageType)
        raise ManifestError(
            f"Invalid package type '{raw_type}' (expected one of: {valid})", manifest_path
        ) from None

    raw_dependencies = data.get("dependencies", {})
    if not isinstance(raw_dependencies, dict):
        raise ManifestError("[dependencies] must be a table", manifest_path)
    dependencies = {
        dep_name: _parse_dependency(dep_name, raw, manifest_path)
        for dep_name, raw in raw_dependencies.items()
    }

    root_dir = manifest_path.parent
    entry = _optional_str(package, "entry", manifest_path) or DEFAULT_ENTRY
    return Package(
        name=name,
        package_type=package_type,
        root_dir=root_dir,
        entry_path=root_dir / entry,
        version=_optional_str(package, "version", manifest_path),
        compiler_version=_optional_str(package, "compiler_version", manifest_path),
        dependencies=dependencies,
    )


def load_manifest(manifest_path: Union[str, Path] = MANIFEST_FILENAME) -> Package:
    """
    Read and validate a Nargo.toml file.

    Args:
        manifest_path: Path to the manifest, or to the directory holding it

    Raises:
        ManifestError: If the file is unreadable, not valid TOML or invalid
    """
    path = Path(manifest_path)
    if path.is_dir():
        path = path / MANIFEST_FILENAME

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ManifestError(f"Cannot read manifest: {e.strerror or e}", path) from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML: {e}", path) from e

    return parse_manifest(data, path)
