"""Workspace - Saved projects, open tabs and the active view."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional
import logging

from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

NAME_EXISTS_ERROR = "A project with this name already exists"
NAME_EMPTY_ERROR = "Name cannot be empty"
MAX_TABS_ERROR = "Maximum tabs reached"
UNKNOWN_PROJECT_ERROR = "Project not found"

DRAFT_NAME = "Untitled Project"
UNKNOWN_USER = "Unknown user"


class ProjectType(str, Enum):
    CAROUSEL = "carousel"
    EBLAST = "eblast"
    SINGLE_IMAGE = "single-image"
    VIDEO_COVER = "video-cover"


class View(str, Enum):
    HOME = "home"
    EDITOR = "editor"


def _today() -> str:
    return date.today().isoformat()


@dataclass
class ProjectRecord:
    """A saved project as listed on the home page."""

    id: int
    name: str = DRAFT_NAME
    project_type: Optional[ProjectType] = None
    has_content: bool = False  # False until the create form is completed
    created_at: str = field(default_factory=_today)
    updated_at: str = field(default_factory=_today)
    last_edited_by: str = UNKNOWN_USER
    frame_count: int = 0

    @property
    def is_draft(self) -> bool:
        return not self.has_content

    def touch(self, user: str) -> None:
        """Record an edit by ``user`` today."""
        self.updated_at = _today()
        self.last_edited_by = user

    def to_dict(self) -> dict:
        """Convert to dict for persistence."""
        return {
            "id": self.id,
            "name": self.name,
            "projectType": self.project_type.value if self.project_type else None,
            "hasContent": self.has_content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "lastEditedBy": self.last_edited_by,
            "frameCount": self.frame_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ProjectRecord':
        project_type = data.get("projectType")
        return cls(
            id=int(data["id"]),
            name=data.get("name", DRAFT_NAME),
            project_type=ProjectType(project_type) if project_type else None,
            has_content=bool(data.get("hasContent", False)),
            created_at=data.get("createdAt") or _today(),
            updated_at=data.get("updatedAt") or _today(),
            last_edited_by=data.get("lastEditedBy", UNKNOWN_USER),
            frame_count=int(data.get("frameCount", 0)),
        )


@dataclass(frozen=True)
class OperationResult:
    """Outcome of an operation that can fail for user-facing reasons."""

    success: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            result["error"] = self.error
        return result


OK = OperationResult(success=True)


class Workspace:
    """
    Project registry with tabs.

    Args:
        projects: Saved projects
        user: Email recorded as last editor
        settings: Settings (tab limit); defaults to the module settings
    """

    def __init__(
        self,
        projects: Optional[list[ProjectRecord]] = None,
        user: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.user = user or UNKNOWN_USER
        self.projects: list[ProjectRecord] = list(projects or [])
        self.open_tab_ids: list[int] = []
        self.active_tab_id: Optional[int] = None
        self.current_view: View = View.HOME

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def max_tabs(self) -> int:
        return self.settings.MAX_TABS

    @property
    def tabs(self) -> list[ProjectRecord]:
        """Open projects in project order."""
        return [p for p in self.projects if p.id in self.open_tab_ids]

    @property
    def active_tab(self) -> Optional[ProjectRecord]:
        return self.get(self.active_tab_id)

    def get(self, project_id: Optional[int]) -> Optional[ProjectRecord]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def next_id(self) -> int:
        return max((p.id for p in self.projects), default=0) + 1

    def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """Case-insensitive check against every other saved project."""
        wanted = name.strip().lower()
        return any(p.id != exclude_id and p.name.lower() == wanted for p in self.projects)

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    def click_tab(self, tab_id: int) -> None:
        self.active_tab_id = tab_id

    def add_tab(self) -> Optional[ProjectRecord]:
        """
        Open a new draft project in a new tab.

        Returns:
            The draft, or None when the tab limit is reached
        """
        if len(self.open_tab_ids) >= self.max_tabs:
            logger.debug(f"Tab limit of {self.max_tabs} reached")
            return None
        draft = ProjectRecord(id=self.next_id(), last_edited_by=self.user)
        self.projects.append(draft)
        self.open_tab_ids.append(draft.id)
        self.active_tab_id = draft.id
        self.current_view = View.EDITOR
        return draft

    def open_project(self, project_id: int) -> OperationResult:
        """Open a saved project, reusing its tab if already open."""
        project = self.get(project_id)
        if project is None:
            return OperationResult(success=False, error=UNKNOWN_PROJECT_ERROR)
        if project_id not in self.open_tab_ids:
            if len(self.open_tab_ids) >= self.max_tabs:
                return OperationResult(success=False, error=MAX_TABS_ERROR)
            self.open_tab_ids.append(project_id)
        self.active_tab_id = project_id
        self.current_view = View.EDITOR
        project.touch(self.user)
        return OK

    def close_tab(self, tab_id: int) -> None:
        """
        Close a tab. Drafts are discarded instead of saved.

        Closing the active tab activates the first remaining one; closing
        the last tab returns to the home view.
        """
        project = self.get(tab_id)
        self.open_tab_ids = [i for i in self.open_tab_ids if i != tab_id]
        if project is not None and project.is_draft:
            self.projects.remove(project)
            logger.info(f"Discarded draft project {tab_id}")

        if not self.open_tab_ids:
            self.active_tab_id = None
            self.current_view = View.HOME
        elif self.active_tab_id == tab_id:
            self.active_tab_id = self.open_tab_ids[0]

    def go_home(self) -> None:
        self.current_view = View.HOME

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def create_project(self, project_type: ProjectType, name: Optional[str] = None) -> Optional[ProjectRecord]:
        """Complete the active draft as a project of ``project_type``."""
        project = self.active_tab
        if project is None:
            return None
        project.name = name or "New Project"
        project.project_type = ProjectType(project_type)
        project.has_content = True
        project.touch(self.user)
        logger.info(f"Created {project.project_type.value} project {project.id}")
        return project

    def delete_project(self, project_id: int) -> None:
        project = self.get(project_id)
        if project is None:
            return
        self.projects.remove(project)
        remaining = [i for i in self.open_tab_ids if i != project_id]
        self.open_tab_ids = remaining
        if self.active_tab_id == project_id:
            if remaining:
                self.active_tab_id = remaining[0]
            else:
                self.active_tab_id = None
                self.current_view = View.HOME

    def duplicate_project(self, project_id: int) -> Optional[ProjectRecord]:
        """Save a copy named "<name> (Copy)" without opening it."""
        source = self.get(project_id)
        if source is None:
            return None
        today = _today()
        copy = ProjectRecord(
            id=self.next_id(),
            name=f"{source.name} (Copy)",
            project_type=source.project_type,
            has_content=source.has_content,
            created_at=today,
            updated_at=today,
            last_edited_by=self.user,
            frame_count=source.frame_count,
        )
        self.projects.append(copy)
        return copy

    def rename_project(self, project_id: int, new_name: str) -> OperationResult:
        """
        Rename a project.

        Names are trimmed and must be unique among all saved projects
        (ignoring case). A failed rename changes nothing.
        """
        name = new_name.strip()
        if not name:
            return OperationResult(success=False, error=NAME_EMPTY_ERROR)
        if self.name_exists(name, exclude_id=project_id):
            return OperationResult(success=False, error=NAME_EXISTS_ERROR)
        project = self.get(project_id)
        if project is None:
            return OperationResult(success=False, error=UNKNOWN_PROJECT_ERROR)
        project.name = name
        project.touch(self.user)
        return OK

    def rename_active(self, new_name: str) -> OperationResult:
        """Rename the project in the active tab."""
        if self.active_tab_id is None:
            return OperationResult(success=False, error=UNKNOWN_PROJECT_ERROR)
        return self.rename_project(self.active_tab_id, new_name)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "projects": [p.to_dict() for p in self.projects],
            "activeTabId": self.active_tab_id,
            "currentView": self.current_view.value,
            "openTabIds": list(self.open_tab_ids),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        user: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> 'Workspace':
        """
        Restore a workspace saved with ``to_dict``.

        With an active tab the editor view is restored, otherwise home.
        """
        workspace = cls(
            [ProjectRecord.from_dict(item) for item in data.get("projects", [])],
            user=user,
            settings=settings,
        )
        known = {p.id for p in workspace.projects}
        active = data.get("activeTabId")
        workspace.active_tab_id = active if active in known else None
        open_ids = data.get("openTabIds")
        if open_ids is None:
            open_ids = [workspace.active_tab_id] if workspace.active_tab_id is not None else []
        workspace.open_tab_ids = [i for i in open_ids if i in known][:workspace.max_tabs]
        if workspace.active_tab_id is not None:
            workspace.current_view = View(data.get("currentView") or View.EDITOR.value)
        return workspace
