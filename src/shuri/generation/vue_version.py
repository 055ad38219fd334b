"""
Vue major version detection from a project's package.json.

Understands exact versions ("2.6.11"), caret and tilde ranges ("^3.2.0",
"~2.6.0"), comparison operators (">=2.5.0"), a "v" prefix and compound
ranges (">=2.5 <3.0").
"""
import json
import logging
import re
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SUPPORTED_MAJORS = (2, 3)


def parse_vue_major(version: str | None) -> Optional[int]:
    """
    Extract the Vue major version from a dependency specifier.

    Args:
        version: Specifier as written in package.json

    Returns:
        2 or 3, or None if the specifier does not name a supported major
    """
    if not version or not isinstance(version, str):
        return None
    spec = version.strip()

    for major in SUPPORTED_MAJORS:
        if re.match(rf"^\s*(?:v|\^|~|>=|<=|>|<)?\s*{major}(?:\.|$)", spec):
            return major

    for major in SUPPORTED_MAJORS:
        if re.search(rf"\^{major}(?:\.|$)", spec):
            return major

    fallback = re.match(r"^\s*[^\d]*([0-9]+)(?=\.|$)", spec)
    if fallback:
        major = int(fallback.group(1))
        if major in SUPPORTED_MAJORS:
            return major

    return None


def detect_vue_version(root_dir: str | Path) -> Optional[int]:
    """
    Read the vue dependency from <root_dir>/package.json.

    Args:
        root_dir: Project root

    Returns:
        2 or 3, or None when package.json is missing, unreadable or has no vue dependency
    """
    package_json = Path(root_dir) / "package.json"
    try:
        with open(package_json, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {package_json}: {e}")
        return None

    if not isinstance(data, dict):
        return None

    version = (data.get("dependencies") or {}).get("vue") or (data.get("devDependencies") or {}).get("vue")
    major = parse_vue_major(version)
    logger.debug(f"Detected Vue {major} from {package_json} ({version!r})")
    return major
