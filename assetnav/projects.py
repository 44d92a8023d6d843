"""
Project registry.

Supplies project display names for folder and document resolution. The
registry is loaded from a JSON list of project objects; it stands in for
the dashboard database when that is not available.
"""

import os
import re
import json
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ProjectInfo:
    job_number: str
    name: Optional[str] = None
    fabricator: Optional[str] = None
    contractor: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["ProjectInfo"]:
        job_number = data.get("jobNumber") or data.get("job_number") or data.get("Job Number")
        if not job_number:
            return None
        return cls(
            job_number=str(job_number).strip(),
            name=data.get("name") or data.get("Name"),
            fabricator=data.get("fabricator") or data.get("fabricatorName"),
            contractor=data.get("contractor") or data.get("contractorName") or data.get("Contractor"),
            location=data.get("location") or data.get("Location"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _contains_token(text: str, token: str) -> bool:
    pattern = rf'(?<![A-Za-z0-9]){re.escape(token)}(?![A-Za-z0-9])'
    return re.search(pattern, text) is not None


class ProjectRegistry:
    """In-memory lookup of projects by job number."""

    def __init__(self, projects: Optional[List[ProjectInfo]] = None):
        self.projects = list(projects or [])

    def __len__(self) -> int:
        return len(self.projects)

    def find(self, identifier: Optional[str]) -> Optional[ProjectInfo]:
        """
        Find a project by job number.

        An exact match wins; otherwise the first project whose job number
        appears inside the identifier (e.g. a folder name) as a whole token
        is returned, so "U252" does not match "U2524".
        """
        if not identifier:
            return None
        for project in self.projects:
            if project.job_number == identifier:
                return project
        for project in self.projects:
            if project.job_number and _contains_token(identifier, project.job_number):
                return project
        return None

    def project_name(self, identifier: Optional[str]) -> Optional[str]:
        project = self.find(identifier)
        return project.name if project else None

    @classmethod
    def from_file(cls, path: Optional[str]) -> "ProjectRegistry":
        """
        Load a registry from a JSON file.

        A missing path or unreadable file yields an empty registry.
        """
        if not path or not os.path.exists(path):
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load project registry {path}: {e}")
            return cls()

        if isinstance(data, dict):
            data = data.get("projects", [])
        if not isinstance(data, list):
            logger.warning(f"Project registry {path} is not a list")
            return cls()

        projects = []
        for item in data:
            if isinstance(item, dict):
                project = ProjectInfo.from_dict(item)
                if project:
                    projects.append(project)
        logger.info(f"Loaded {len(projects)} projects from {path}")
        return cls(projects)
