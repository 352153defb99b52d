"""Loading and exporting release data files.

Accepts the JSON export of the browser planning tool (``{"releases": [...],
"activeReleaseId": ...}``), the same structure written as YAML, or a file
holding a single release document.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ReleaseNotFoundError, ValidationError
from .logger import get_logger
from .models import ProjectData, Release

logger = get_logger()


def _read_document(path: Path) -> Any:
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Failed to parse JSON: {e}") from e

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e


def parse_project(data: Any) -> ProjectData:
    """Validate decoded file content into ProjectData."""
    if not isinstance(data, dict):
        raise ParseError("Release data must contain a mapping at the root level")

    if "releases" not in data and ("startDate" in data or "start_date" in data):
        # Single release document
        data = {"releases": [data], "activeReleaseId": data.get("id")}

    try:
        return ProjectData.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid release data: {e}") from e


def load_project(path: Path | str) -> ProjectData:
    """Load every release stored in a JSON or YAML file."""
    path = Path(path)
    project = parse_project(_read_document(path))
    logger.checks(f"Loaded {len(project.releases)} release(s) from {path}")
    return project


def select_release(project: ProjectData, release_id: str | None = None) -> Release:
    """Pick a release: the requested id, else the active one, else the only one."""
    if release_id is not None:
        release = project.get_release(release_id)
        if release is None:
            available = ", ".join(r.id for r in project.releases) or "none"
            raise ReleaseNotFoundError(
                f"Release '{release_id}' not found (available: {available})"
            )
        return release

    if project.active_release_id is not None:
        active = project.get_release(project.active_release_id)
        if active is not None:
            return active

    if len(project.releases) == 1:
        return project.releases[0]

    if not project.releases:
        raise ReleaseNotFoundError("File contains no releases")
    raise ReleaseNotFoundError(
        "File contains several releases and none is active; choose one with --release"
    )


def load_release(path: Path | str, release_id: str | None = None) -> Release:
    """Load a single release from a data file."""
    return select_release(load_project(path), release_id)


def dump_project(project: ProjectData) -> str:
    """Serialize to the camelCase JSON export format."""
    payload = project.model_dump(mode="json", by_alias=True, exclude_none=True)
    if project.active_release_id is None:
        payload["activeReleaseId"] = None
    return json.dumps(payload, indent=2)


def write_project(path: Path | str, project: ProjectData) -> None:
    """Write project data as JSON (``.json``) or YAML (anything else)."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        path.write_text(dump_project(project) + "\n", encoding="utf-8")
        return

    payload = project.model_dump(mode="json", by_alias=True, exclude_none=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(payload, f, sort_keys=False, allow_unicode=True)
