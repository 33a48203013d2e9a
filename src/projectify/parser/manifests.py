"""Third-party dependency extraction from package manifests."""

import json
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
REQUIREMENTS_TXT = "requirements.txt"

# Dependency sections merged from package.json, later sections win
PACKAGE_JSON_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")

REQUIREMENT_PATTERN = re.compile(r"^([A-Za-z0-9][A-Za-z0-9._\-]*(?:\[[^\]]*\])?)\s*(.*)$")


def is_manifest(file_path: Path | str) -> bool:
    """Check if a file is a dependency manifest we understand."""
    return Path(file_path).name in {PACKAGE_JSON, REQUIREMENTS_TXT}


def parse_package_json(content: str) -> dict[str, str]:
    """Collect dependencies declared in a package.json.

    Args:
        content: Raw file contents

    Returns:
        Mapping of package name to version spec (empty if the JSON is invalid)
    """
    try:
        package = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse package.json: {e}")
        return {}

    if not isinstance(package, dict):
        return {}

    dependencies: dict[str, str] = {}
    for section in PACKAGE_JSON_SECTIONS:
        entries = package.get(section)
        if isinstance(entries, dict):
            dependencies.update({str(name): str(version) for name, version in entries.items()})
    return dependencies


def parse_requirements(content: str) -> dict[str, str]:
    """Collect dependencies declared in a requirements.txt.

    Pinned requirements (``name==1.2``) map to their version; anything else
    maps to its specifier, or "latest" when there is none.

    Args:
        content: Raw file contents

    Returns:
        Mapping of package name to version spec
    """
    dependencies: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.split("#", 1)[0].strip()
        # Skip blanks and pip options (-r, -e, --index-url, ...)
        if not line or line.startswith("-"):
            continue

        if "==" in line:
            name, _, version = line.partition("==")
            dependencies[name.strip()] = version.strip() or "latest"
            continue

        match = REQUIREMENT_PATTERN.match(line)
        if match:
            dependencies[match.group(1)] = match.group(2).strip() or "latest"
    return dependencies


def parse_manifest(file_path: Path | str, content: str) -> dict[str, str]:
    """Parse whichever manifest format ``file_path`` is.

    Args:
        file_path: Path of the manifest
        content: Raw file contents

    Returns:
        Mapping of package name to version spec (empty for other files)
    """
    name = Path(file_path).name
    if name == PACKAGE_JSON:
        return parse_package_json(content)
    if name == REQUIREMENTS_TXT:
        return parse_requirements(content)
    return {}
