"""Tests for the category service."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from src.config import Settings
from src.models import BoardColumn, Category, Project, Task, User
from src.services.category import CategoryService


@pytest.fixture
def board(db):
    """Two projects, the first one with categories and tasks."""
    user = User(username="cattest", name="Cat Test", password_hash="fake")
    db.add(user)
    db.flush()

    project = Project(name="Website", owner_id=user.id)
    other_project = Project(name="Mobile app", owner_id=user.id)
    db.add_all([project, other_project])
    db.flush()

    column = BoardColumn(project_id=project.id, title="Backlog", position=1)
    db.add(column)
    db.flush()

    feature = Category(project_id=project.id, name="Feature")
    bug = Category(project_id=project.id, name="Bug")
    other = Category(project_id=other_project.id, name="Bug")
    db.add_all([feature, bug, other])
    db.flush()

    tasks = [
        Task(project_id=project.id, column_id=column.id, title="Fix login", category_id=bug.id),
        Task(project_id=project.id, column_id=column.id, title="Fix logout", category_id=bug.id),
        Task(project_id=project.id, column_id=column.id, title="Dark mode", category_id=feature.id),
    ]
    db.add_all(tasks)
    db.commit()

    return {
        "project": project,
        "other_project": other_project,
        "column": column,
        "feature": feature,
        "bug": bug,
        "other": other,
        "tasks": tasks,
    }


def test_exists(db, board):
    """A category only exists within its own project."""
    service = CategoryService(db)

    assert service.exists(board["bug"].id, board["project"].id) is True
    assert service.exists(board["bug"].id, board["other_project"].id) is False
    assert service.exists(9999, board["project"].id) is False


def test_get_by_id(db, board):
    service = CategoryService(db)

    category = service.get_by_id(board["feature"].id)
    assert category.name == "Feature"
    assert category.project_id == board["project"].id
    assert service.get_by_id(9999) is None


def test_get_name_by_id(db, board):
    """Unknown ids give an empty name."""
    service = CategoryService(db)

    assert service.get_name_by_id(board["bug"].id) == "Bug"
    assert service.get_name_by_id(9999) == ""


def test_get_id_by_name(db, board):
    """Lookup by name is scoped to the project, 0 when missing."""
    service = CategoryService(db)

    assert service.get_id_by_name(board["project"].id, "Bug") == board["bug"].id
    assert service.get_id_by_name(board["other_project"].id, "Bug") == board["other"].id
    assert service.get_id_by_name(board["other_project"].id, "Feature") == 0


def test_get_list(db, board):
    """Categories sorted by name, with "No category" first by default."""
    service = CategoryService(db)
    project_id = board["project"].id

    listing = service.get_list(project_id)
    assert list(listing.items()) == [
        (0, "No category"),
        (board["bug"].id, "Bug"),
        (board["feature"].id, "Feature"),
    ]

    listing = service.get_list(project_id, prepend_none=False, prepend_all=True)
    assert list(listing) == [-1, board["bug"].id, board["feature"].id]
    assert listing[-1] == "All categories"

    listing = service.get_list(project_id, prepend_none=True, prepend_all=True)
    assert list(listing)[:2] == [-1, 0]

    assert service.get_list(project_id, prepend_none=False) == {
        board["bug"].id: "Bug",
        board["feature"].id: "Feature",
    }


def test_get_list_empty_project(db, board):
    service = CategoryService(db)
    project = Project(name="Empty", owner_id=board["project"].owner_id)
    db.add(project)
    db.commit()

    assert service.get_list(project.id) == {0: "No category"}
    assert service.get_list(project.id, prepend_none=False) == {}


def test_get_all(db, board):
    """All categories of a project, ordered by name."""
    service = CategoryService(db)

    categories = service.get_all(board["project"].id)
    assert [c.name for c in categories] == ["Bug", "Feature"]


def test_create_default_categories(db, board):
    """Blank entries of the setting are skipped and names are trimmed."""
    service = CategoryService(db, Settings(project_categories=" Support,, Docs ,  ,Ops"))
    project = Project(name="Defaults", owner_id=board["project"].owner_id)
    db.add(project)
    db.flush()

    service.create_default_categories(project.id)
    db.commit()

    assert [c.name for c in service.get_all(project.id)] == ["Docs", "Ops", "Support"]


def test_create_default_categories_skips_repeated_names(db, board):
    service = CategoryService(db, Settings(project_categories="Bug, Docs,Bug , Docs"))
    project = Project(name="Repeated", owner_id=board["project"].owner_id)
    db.add(project)
    db.flush()

    service.create_default_categories(project.id)
    db.commit()

    assert [c.name for c in service.get_all(project.id)] == ["Bug", "Docs"]
    assert service.get_id_by_name(project.id, "Bug")


def test_create_default_categories_empty_setting(db, board):
    service = CategoryService(db, Settings(project_categories=""))
    project = Project(name="No defaults", owner_id=board["project"].owner_id)
    db.add(project)
    db.flush()

    service.create_default_categories(project.id)
    db.commit()

    assert service.get_all(project.id) == []


def test_create(db, board):
    """Create returns the new id."""
    service = CategoryService(db)

    category_id = service.create({"project_id": board["project"].id, "name": "Security"})

    assert category_id
    assert service.get_name_by_id(category_id) == "Security"
    assert service.exists(category_id, board["project"].id)


def test_create_failure(db, board):
    """A row the database refuses gives False."""
    service = CategoryService(db)

    assert service.create({"project_id": board["project"].id, "name": None}) is False
    assert [c.name for c in service.get_all(board["project"].id)] == ["Bug", "Feature"]


def test_update(db, board):
    service = CategoryService(db)
    values = {"id": board["bug"].id, "project_id": board["project"].id, "name": "Defect"}

    assert service.update(values) is True
    assert service.get_name_by_id(board["bug"].id) == "Defect"
    assert service.get_id_by_name(board["project"].id, "Bug") == 0


def test_update_unknown_category(db, board):
    service = CategoryService(db)

    assert service.update({"id": 9999, "name": "Ghost"}) is False


def test_remove_reassigns_tasks(db, board):
    """Tasks of a removed category end up without category."""
    service = CategoryService(db)
    bug_id = board["bug"].id

    assert service.remove(bug_id) is True

    assert service.get_by_id(bug_id) is None
    assert db.query(Task).filter(Task.category_id == bug_id).count() == 0

    categories = {task.title: task.category_id for task in db.query(Task).all()}
    assert categories == {
        "Fix login": 0,
        "Fix logout": 0,
        "Dark mode": board["feature"].id,
    }


def test_remove_unknown_category_rolls_back(db, board):
    """When nothing is deleted the task reassignment is cancelled."""
    service = CategoryService(db)
    dangling = Task(
        project_id=board["project"].id,
        column_id=board["column"].id,
        title="Orphan",
        category_id=4242,
    )
    db.add(dangling)
    db.commit()

    assert service.remove(4242) is False

    db.expire_all()
    assert db.query(Task).filter(Task.title == "Orphan").one().category_id == 4242


def test_remove_database_error_rolls_back(db, board, monkeypatch):
    """A failing delete cancels the task reassignment already executed."""
    service = CategoryService(db)
    bug_id = board["bug"].id

    def failing_delete(self, *args, **kwargs):
        raise OperationalError("DELETE FROM project_has_categories", {}, Exception("locked"))

    monkeypatch.setattr(Query, "delete", failing_delete)

    assert service.remove(bug_id) is False

    monkeypatch.undo()
    db.expire_all()
    assert service.get_by_id(bug_id) is not None
    assert db.query(Task).filter(Task.category_id == bug_id).count() == 2


def test_remove_keeps_other_projects(db, board):
    service = CategoryService(db)

    service.remove(board["bug"].id)

    assert service.get_id_by_name(board["other_project"].id, "Bug") == board["other"].id


def test_duplicate(db, board):
    """Categories are copied by name into the destination project."""
    service = CategoryService(db)
    project = Project(name="Copy", owner_id=board["project"].owner_id)
    db.add(project)
    db.flush()

    assert service.duplicate(board["project"].id, project.id) is True
    db.commit()

    copies = service.get_all(project.id)
    assert [c.name for c in copies] == ["Bug", "Feature"]
    assert {c.id for c in copies}.isdisjoint({board["bug"].id, board["feature"].id})
    assert len(service.get_all(board["project"].id)) == 2


def test_duplicate_empty_project(db, board):
    service = CategoryService(db)
    project = Project(name="Copy", owner_id=board["project"].owner_id)
    db.add(project)
    db.flush()

    assert service.duplicate(project.id, board["other_project"].id) is True
    db.commit()

    assert [c.name for c in service.get_all(board["other_project"].id)] == ["Bug"]
