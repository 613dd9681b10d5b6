"""
Store state - Projects of one type plus the current selection.

The state is an immutable value. Reducers build a new state for every
change and return the same object when nothing changed.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class StoreState:
    """
    State held in the history's present.

    Attributes:
        projects: Projects in display order
        selected_project_id: Selected project (row / email / cover / image)
        selected_frame_id: Selected frame within the selected project
        active_text_field: Text field being edited ('headline', 'body', ...)
        selected_layer_id: Active stack layer (single images only)
    """
    projects: tuple = ()
    selected_project_id: Optional[int] = None
    selected_frame_id: Optional[int] = None
    active_text_field: Optional[str] = None
    selected_layer_id: Optional[int] = None

    def find_project(self, project_id: Optional[int]) -> Optional[Any]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def project_index(self, project_id: Optional[int]) -> int:
        for index, project in enumerate(self.projects):
            if project.id == project_id:
                return index
        return -1

    @property
    def selected_project(self) -> Optional[Any]:
        return self.find_project(self.selected_project_id)

    def with_project(self, project: Any) -> 'StoreState':
        """Replace the project with the same id; ``self`` if unchanged."""
        index = self.project_index(project.id)
        if index < 0 or self.projects[index] is project:
            return self
        projects = self.projects[:index] + (project,) + self.projects[index + 1:]
        return replace(self, projects=projects)

    def with_selection(self, **fields: Any) -> 'StoreState':
        """Update selection fields; ``self`` if nothing differs."""
        if all(getattr(self, key) == value for key, value in fields.items()):
            return self
        return replace(self, **fields)

    def next_project_id(self) -> int:
        return max((project.id for project in self.projects), default=0) + 1
