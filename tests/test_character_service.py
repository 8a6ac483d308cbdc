import pytest

from directors_chair.database import ConstraintViolationError, RecordNotFoundError


def test_create_character_defaults(store, project):
    character = store.characters.create_character({"project_id": project["id"], "name": "Ada"})
    assert character["description"] == ""
    assert character["photo_data"] == ""
    assert character["created_at"]


def test_character_with_unknown_project_is_rejected_and_not_persisted(store, project):
    with pytest.raises(ConstraintViolationError):
        store.characters.create_character({"id": "orphan", "project_id": "no-such-project", "name": "Ghost"})
    assert store.characters.find_character("orphan") is None
    assert store.characters.list_characters("no-such-project") == []


@pytest.mark.parametrize("missing", ["project_id", "name"])
def test_character_required_fields(store, project, missing):
    payload = {"id": "c1", "project_id": project["id"], "name": "Ada"}
    del payload[missing]
    with pytest.raises(ConstraintViolationError) as exc:
        store.characters.create_character(payload)
    assert exc.value.field == missing
    assert store.characters.find_character("c1") is None


def test_list_characters_in_creation_order(store, project):
    for i, name in enumerate(("Ada", "Bram", "Cleo")):
        store.characters.create_character({"id": f"c{i}", "project_id": project["id"], "name": name})
    assert [c["name"] for c in store.characters.list_characters(project["id"])] == ["Ada", "Bram", "Cleo"]


def test_update_character(store, project):
    store.characters.create_character({"id": "c1", "project_id": project["id"], "name": "Ada"})
    updated = store.characters.update_character("c1", {"description": "Conductor", "photo_data": "data:image/png;base64,AAA"})
    assert updated["description"] == "Conductor"
    assert updated["photo_data"].startswith("data:image/png")
    with pytest.raises(ConstraintViolationError):
        store.characters.update_character("c1", {"project_id": "elsewhere"})
    with pytest.raises(RecordNotFoundError):
        store.characters.update_character("missing", {"name": "x"})


def test_deleting_referenced_character_leaves_scene_untouched(store, populated_project):
    before = store.scenes.get_scene("scene-0")

    store.characters.delete_character("char-a")

    after = store.scenes.get_scene("scene-0")
    assert after == before
    assert after["characters_json"] == '["char-a", "char-b"]'
    assert [c["id"] for c in store.scenes.get_scene_characters("scene-0")] == ["char-b"]


def test_delete_missing_character_is_not_found(store):
    with pytest.raises(RecordNotFoundError):
        store.characters.delete_character("nobody")
