"""
Tests for the workspace: saved projects, tabs and renaming.
"""

import pytest

from slideforge.config import Settings
from slideforge.workspace import (
    MAX_TABS_ERROR,
    NAME_EMPTY_ERROR,
    NAME_EXISTS_ERROR,
    UNKNOWN_PROJECT_ERROR,
    ProjectRecord,
    ProjectType,
    View,
    Workspace,
)


@pytest.fixture
def workspace() -> Workspace:
    """Workspace with two saved projects, both open, the first active."""
    workspace = Workspace(
        [
            ProjectRecord(id=1, name='Spring Launch', project_type=ProjectType.CAROUSEL, has_content=True),
            ProjectRecord(id=2, name='Newsletter', project_type=ProjectType.EBLAST, has_content=True),
        ],
        user='ana@example.com',
    )
    workspace.open_project(2)
    workspace.open_project(1)
    return workspace


class TestRename:
    """Project names."""

    def test_duplicate_name_rejected(self, workspace):
        """Test renaming to another open project's name fails and changes nothing."""
        before = workspace.to_dict()

        result = workspace.rename_project(1, 'Newsletter')

        assert result.to_dict() == {'success': False, 'error': NAME_EXISTS_ERROR}
        assert workspace.to_dict() == before

    def test_duplicate_ignores_case_and_spaces(self, workspace):
        """Test the uniqueness check trims and ignores case."""
        result = workspace.rename_project(1, '  newsLETTER ')
        assert result.error == NAME_EXISTS_ERROR

    def test_empty_name(self, workspace):
        """Test blank names are rejected."""
        result = workspace.rename_project(1, '   ')
        assert not result.success
        assert result.error == NAME_EMPTY_ERROR
        assert workspace.get(1).name == 'Spring Launch'

    def test_rename_trims(self, workspace):
        """Test successful renames store the trimmed name."""
        result = workspace.rename_project(1, '  Summer Launch  ')
        assert result.success
        assert result.to_dict() == {'success': True}
        assert workspace.get(1).name == 'Summer Launch'
        assert workspace.get(1).last_edited_by == 'ana@example.com'

    def test_rename_to_own_name(self, workspace):
        """Test a project may keep its own name in a different case."""
        assert workspace.rename_project(1, 'SPRING LAUNCH').success

    def test_rename_active(self, workspace):
        """Test renaming the active tab."""
        assert workspace.rename_active('Launch').success
        assert workspace.get(1).name == 'Launch'

    def test_rename_unknown(self, workspace):
        """Test renaming a missing project."""
        assert workspace.rename_project(42, 'Anything').error == UNKNOWN_PROJECT_ERROR


class TestTabs:
    """Opening and closing tabs."""

    def test_add_tab_creates_draft(self, workspace):
        """Test a new tab holds an untitled draft."""
        draft = workspace.add_tab()
        assert draft.is_draft
        assert workspace.active_tab_id == draft.id
        assert workspace.current_view == View.EDITOR

    def test_tab_limit(self):
        """Test tabs stop at the configured maximum."""
        workspace = Workspace(settings=Settings(MAX_TABS=2))
        assert workspace.add_tab() is not None
        assert workspace.add_tab() is not None
        assert workspace.add_tab() is None
        assert len(workspace.open_tab_ids) == 2

    def test_open_beyond_limit(self):
        """Test opening a saved project fails at the tab limit."""
        workspace = Workspace(
            [ProjectRecord(id=1, name='A', has_content=True), ProjectRecord(id=2, name='B', has_content=True)],
            settings=Settings(MAX_TABS=1),
        )
        assert workspace.open_project(1).success
        result = workspace.open_project(2)
        assert result.error == MAX_TABS_ERROR
        assert workspace.open_tab_ids == [1]

    def test_open_reuses_tab(self, workspace):
        """Test reopening an open project only activates it."""
        workspace.open_project(2)
        assert workspace.open_tab_ids == [2, 1]
        assert workspace.active_tab_id == 2

    def test_open_unknown(self, workspace):
        """Test opening a missing project."""
        assert workspace.open_project(9).error == UNKNOWN_PROJECT_ERROR

    def test_close_draft_discards_it(self, workspace):
        """Test closing a draft tab removes the draft."""
        draft = workspace.add_tab()
        workspace.close_tab(draft.id)
        assert workspace.get(draft.id) is None
        assert workspace.active_tab_id == 2

    def test_close_saved_keeps_project(self, workspace):
        """Test closing a saved project's tab keeps the project."""
        workspace.close_tab(1)
        assert workspace.get(1) is not None
        assert workspace.active_tab_id == 2

    def test_close_inactive_keeps_active(self, workspace):
        """Test closing another tab keeps the active one."""
        workspace.close_tab(2)
        assert workspace.active_tab_id == 1

    def test_close_last_goes_home(self, workspace):
        """Test closing every tab returns to the home view."""
        workspace.close_tab(1)
        workspace.close_tab(2)
        assert workspace.active_tab_id is None
        assert workspace.current_view == View.HOME

    def test_tabs_in_project_order(self, workspace):
        """Test tabs are listed in project order."""
        assert [p.id for p in workspace.tabs] == [1, 2]


class TestProjects:
    """Creating, duplicating and deleting projects."""

    def test_create_completes_draft(self, workspace):
        """Test completing the create form turns the draft into a project."""
        draft = workspace.add_tab()
        project = workspace.create_project(ProjectType.VIDEO_COVER, 'Episode 1')
        assert project is draft
        assert not project.is_draft
        assert project.project_type == ProjectType.VIDEO_COVER

    def test_create_without_tab(self):
        """Test creating needs an active tab."""
        assert Workspace().create_project('carousel') is None

    def test_duplicate(self, workspace):
        """Test duplicates get a copy suffix and are not opened."""
        copy = workspace.duplicate_project(2)
        assert copy.name == 'Newsletter (Copy)'
        assert copy.project_type == ProjectType.EBLAST
        assert copy.id not in workspace.open_tab_ids

    def test_delete_active(self, workspace):
        """Test deleting the active project activates the next tab."""
        workspace.delete_project(1)
        assert workspace.get(1) is None
        assert workspace.open_tab_ids == [2]
        assert workspace.active_tab_id == 2

    def test_delete_last_goes_home(self):
        """Test deleting the only open project returns home."""
        workspace = Workspace([ProjectRecord(id=1, name='Solo', has_content=True)])
        workspace.open_project(1)
        workspace.delete_project(1)
        assert workspace.current_view == View.HOME


class TestPersistence:
    """to_dict/from_dict."""

    def test_round_trip(self, workspace):
        """Test a saved workspace restores tabs and view."""
        restored = Workspace.from_dict(workspace.to_dict())
        assert restored.to_dict() == workspace.to_dict()

    def test_unknown_ids_dropped(self):
        """Test tabs of missing projects are dropped on restore."""
        data = {
            'projects': [{'id': 1, 'name': 'A', 'projectType': 'carousel', 'hasContent': True}],
            'activeTabId': 7,
            'openTabIds': [1, 7],
        }
        restored = Workspace.from_dict(data)
        assert restored.open_tab_ids == [1]
        assert restored.active_tab_id is None
        assert restored.current_view == View.HOME

    def test_record_format(self):
        """Test records use the camelCase format."""
        record = ProjectRecord(id=3, name='Promo', project_type=ProjectType.SINGLE_IMAGE)
        data = record.to_dict()
        assert data['projectType'] == 'single-image'
        assert data['hasContent'] is False
        assert ProjectRecord.from_dict(data) == record
