import datetime as dt

import pytest

from forest_helpers import preorder
from timely.features.todos.services import NotFoundError, ValidationError


@pytest.mark.parametrize("name", ["", "   "])
def test_create_with_empty_name_fails(service, name):
    with pytest.raises(ValidationError):
        service.create(name=name)
    assert service.list_flat() == []


def test_create_with_unknown_parent_fails(service):
    with pytest.raises(NotFoundError):
        service.create(name="Orphan", parent_id=42)
    assert service.list_flat() == []


def test_create_adds_one_top_level_entry(service):
    before = len(service.list())
    todo = service.create(name="Buy milk")

    forest = service.list()
    assert len(forest) == before + 1
    node = forest[-1]
    assert node.todo.id == todo.id
    assert node.todo.name == "Buy milk"
    assert node.todo.done is False
    assert node.todo.parent_id is None
    assert node.children == []


def test_create_keeps_optional_fields(service):
    todo = service.create(name="Dentist", description="Bring the card", date="2025-03-14")
    assert todo.description == "Bring the card"
    assert todo.date == dt.date(2025, 3, 14)


def test_create_normalises_blank_optional_fields(service):
    todo = service.create(name="  Read  ", description="  ", date=" ")
    assert todo.name == "Read"
    assert todo.description is None
    assert todo.date is None


def test_create_with_bad_date_fails(service):
    with pytest.raises(ValidationError):
        service.create(name="Later", date="14/03/2025")


def test_toggle_twice_is_round_trip(service):
    todo = service.create(name="Groceries")
    assert service.get(todo.id).done is False
    assert service.toggle(todo.id).done is True
    assert service.toggle(todo.id).done is False


def test_toggle_does_not_touch_children(service):
    parent = service.create(name="Groceries")
    child = service.create(name="Milk", parent_id=parent.id)

    service.toggle(parent.id)

    assert service.get(parent.id).done is True
    assert service.get(child.id).done is False


def test_toggle_unknown_fails(service):
    with pytest.raises(NotFoundError):
        service.toggle(999)


def test_operations_after_delete_fail(service):
    todo_id = service.create(name="Temporary").id
    service.delete(todo_id)

    with pytest.raises(NotFoundError):
        service.get(todo_id)
    with pytest.raises(NotFoundError):
        service.toggle(todo_id)
    with pytest.raises(NotFoundError):
        service.delete(todo_id)
    with pytest.raises(NotFoundError):
        service.create(name="Child", parent_id=todo_id)


@pytest.mark.parametrize("todo_id", [0, -1, 2**63, 10**30])
def test_out_of_range_ids_are_not_found(service, todo_id):
    with pytest.raises(NotFoundError):
        service.get(todo_id)
    with pytest.raises(NotFoundError):
        service.toggle(todo_id)
    with pytest.raises(NotFoundError):
        service.delete(todo_id)
    with pytest.raises(NotFoundError):
        service.create(name="Child", parent_id=todo_id)
    assert service.list_flat() == []


def test_parent_with_child_is_listed_as_tree(service):
    groceries = service.create(name="Groceries")
    milk = service.create(name="Milk", parent_id=groceries.id)

    forest = service.list()

    assert [n.todo.id for n in forest] == [groceries.id]
    assert [c.todo.id for c in forest[0].children] == [milk.id]
    assert forest[0].children[0].children == []


def test_list_never_puts_child_before_parent(service):
    a = service.create(name="A")
    b = service.create(name="B")
    a1 = service.create(name="A1", parent_id=a.id)
    b1 = service.create(name="B1", parent_id=b.id)
    service.create(name="A1x", parent_id=a1.id)
    service.create(name="B1x", parent_id=b1.id)

    seen = set()
    for _, todo in preorder(service.list()):
        assert todo.parent_id is None or todo.parent_id in seen
        seen.add(todo.id)
    assert len(seen) == 6


def test_delete_cascades_to_descendants(service):
    groceries = service.create(name="Groceries")
    milk = service.create(name="Milk", parent_id=groceries.id)
    skimmed = service.create(name="Skimmed", parent_id=milk.id)
    other = service.create(name="Laundry")
    # les instances supprimées ne sont plus lisibles après le commit
    subtree = [groceries.id, milk.id, skimmed.id]
    other_id = other.id

    removed = service.delete(subtree[0])

    assert sorted(removed) == sorted(subtree)
    assert [t.id for t in service.list_flat()] == [other_id]
    for todo_id in subtree:
        with pytest.raises(NotFoundError):
            service.get(todo_id)


def test_delete_child_keeps_parent(service):
    groceries = service.create(name="Groceries")
    milk_id = service.create(name="Milk", parent_id=groceries.id).id

    assert service.delete(milk_id) == [milk_id]
    forest = service.list()
    assert [n.todo.id for n in forest] == [groceries.id]
    assert forest[0].children == []


def test_list_filters_by_date_window(service):
    service.create(name="Undated")
    early = service.create(name="Early", date="2025-01-10")
    mid = service.create(name="Mid", date="2025-02-10")
    late = service.create(name="Late", date="2025-03-10")

    assert [t.id for t in service.list_flat(date_from=dt.date(2025, 2, 1))] == [mid.id, late.id]
    assert [t.id for t in service.list_flat(date_to=dt.date(2025, 2, 10))] == [early.id, mid.id]
    window = service.list_flat(date_from=dt.date(2025, 2, 10), date_to=dt.date(2025, 2, 10))
    assert [t.id for t in window] == [mid.id]


def test_filtered_out_parent_promotes_children(service):
    project = service.create(name="Project")
    step = service.create(name="Step", parent_id=project.id, date="2025-05-01")

    forest = service.list(date_from=dt.date(2025, 1, 1))

    assert [n.todo.id for n in forest] == [step.id]


def test_create_under_parent_cycle_fails(service, session):
    a = service.create(name="A")
    b = service.create(name="B", parent_id=a.id)
    # cycle introduit hors application
    a.parent_id = b.id
    session.add(a)
    session.commit()

    with pytest.raises(ValidationError):
        service.create(name="C", parent_id=b.id)
