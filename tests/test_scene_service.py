import json

import pytest

from directors_chair.database import ConstraintViolationError, RecordNotFoundError


def test_scene_defaults_from_minimal_payload(store, project):
    scene = store.scenes.create_scene({"project_id": project["id"], "scene_number": 1})
    assert scene["camera_angle"] == "medium shot"
    assert scene["lighting"] == "natural"
    assert scene["duration"] == 5
    assert scene["status"] == "pending"
    assert scene["sort_order"] == 0
    assert scene["characters_json"] == "[]"
    assert scene["title"] == scene["dialog"] == scene["video_url"] == ""


def test_scenes_listed_by_sort_order_not_insertion(store, project):
    for sort_order in (2, 0, 1):
        store.scenes.create_scene({
            "id": f"s{sort_order}",
            "project_id": project["id"],
            "scene_number": 10 - sort_order,
            "sort_order": sort_order,
        })
    scenes = store.scenes.list_scenes(project["id"])
    assert [s["sort_order"] for s in scenes] == [0, 1, 2]
    assert [s["scene_number"] for s in scenes] == [10, 9, 8]


def test_scene_number_need_not_be_unique(store, project):
    store.scenes.create_scene({"project_id": project["id"], "scene_number": 1})
    store.scenes.create_scene({"project_id": project["id"], "scene_number": 1, "sort_order": 1})
    assert len(store.scenes.list_scenes(project["id"])) == 2


def test_append_scene_goes_last(store, project):
    assert store.scenes.next_sort_order(project["id"]) == 0
    first = store.scenes.append_scene({"project_id": project["id"], "scene_number": 1})
    second = store.scenes.append_scene({"project_id": project["id"], "scene_number": 2})
    assert (first["sort_order"], second["sort_order"]) == (0, 1)
    assert store.scenes.next_sort_order(project["id"]) == 2


def test_scene_requires_existing_project_and_scene_number(store, project):
    with pytest.raises(ConstraintViolationError):
        store.scenes.create_scene({"project_id": "missing", "scene_number": 1})
    with pytest.raises(ConstraintViolationError) as exc:
        store.scenes.create_scene({"project_id": project["id"]})
    assert exc.value.field == "scene_number"
    with pytest.raises(ConstraintViolationError) as exc:
        store.scenes.create_scene({"scene_number": 1})
    assert exc.value.field == "project_id"
    assert store.scenes.list_scenes(project["id"]) == []


def test_characters_are_soft_references(store, project):
    scene = store.scenes.create_scene({
        "project_id": project["id"],
        "scene_number": 1,
        "characters": ["never-existed", "also-not-here"],
    })
    assert json.loads(scene["characters_json"]) == ["never-existed", "also-not-here"]
    assert store.scenes.get_scene_characters(scene["id"]) == []


def test_scene_characters_skip_dangling_and_foreign_ids(store, populated_project):
    other = store.projects.create_project({"id": "other", "name": "Other"})
    store.characters.create_character({"id": "char-x", "project_id": other["id"], "name": "Xena"})
    store.scenes.update_scene("scene-2", {"characters": ["char-b", "char-x", "gone", "char-a"]})

    characters = store.scenes.get_scene_characters("scene-2")
    assert [c["id"] for c in characters] == ["char-b", "char-a"]


def test_malformed_characters_json_reads_as_empty(store, project):
    from sqlalchemy import text

    scene = store.scenes.create_scene({"project_id": project["id"], "scene_number": 1})
    with store.db_manager.session_scope() as session:
        session.execute(text("UPDATE scenes SET characters_json = 'not json' WHERE id = :id"), {"id": scene["id"]})
    assert store.scenes.get_scene_characters(scene["id"]) == []


def test_prune_dangling_characters_is_explicit(store, populated_project):
    store.characters.delete_character("char-a")
    assert json.loads(store.scenes.get_scene("scene-1")["characters_json"]) == ["char-a", "char-b"]

    rewritten = store.scenes.prune_dangling_characters(populated_project["id"])

    assert rewritten == 3
    for scene in store.scenes.list_scenes(populated_project["id"]):
        assert json.loads(scene["characters_json"]) == ["char-b"]
    assert store.scenes.prune_dangling_characters(populated_project["id"]) == 0


@pytest.mark.parametrize("given,stored", [
    ("generating", "generating"),
    ("in-progress", "generating"),
    ("COMPLETE", "completed"),
    ("Failed", "failed"),
    ("error", "failed"),
])
def test_scene_status_vocabulary(store, project, given, stored):
    scene = store.scenes.create_scene({"project_id": project["id"], "scene_number": 1})
    assert store.scenes.update_scene(scene["id"], {"status": given})["status"] == stored


def test_invalid_scene_status_rejected(store, project):
    scene = store.scenes.create_scene({"project_id": project["id"], "scene_number": 1})
    with pytest.raises(ConstraintViolationError) as exc:
        store.scenes.update_scene(scene["id"], {"status": "rendering-maybe"})
    assert exc.value.field == "status"
    assert store.scenes.get_scene(scene["id"])["status"] == "pending"


def test_update_scene_fields(store, project):
    scene = store.scenes.create_scene({"project_id": project["id"], "scene_number": 1})
    updated = store.scenes.update_scene(scene["id"], {
        "title": "Platform 9",
        "prompt": "Steam rising over an empty platform",
        "camera_angle": "wide shot",
        "duration": 8,
    })
    assert (updated["title"], updated["camera_angle"], updated["duration"]) == ("Platform 9", "wide shot", 8)
    assert updated["created_at"] == scene["created_at"]
    with pytest.raises(ConstraintViolationError):
        store.scenes.update_scene(scene["id"], {"duration": 0})


def test_reorder_scenes_rewrites_sequence(store, populated_project):
    reordered = store.scenes.reorder_scenes(populated_project["id"], ["scene-2", "scene-0", "scene-1"])
    assert [(s["id"], s["sort_order"], s["scene_number"]) for s in reordered] == [
        ("scene-2", 0, 1),
        ("scene-0", 1, 2),
        ("scene-1", 2, 3),
    ]
    assert [s["id"] for s in store.scenes.list_scenes(populated_project["id"])] == ["scene-2", "scene-0", "scene-1"]


@pytest.mark.parametrize("ordering", [
    ["scene-0", "scene-1"],
    ["scene-0", "scene-1", "scene-2", "scene-x"],
    ["scene-0", "scene-0", "scene-1"],
])
def test_reorder_rejects_incomplete_or_foreign_ids(store, populated_project, ordering):
    before = store.scenes.list_scenes(populated_project["id"])
    with pytest.raises(ConstraintViolationError):
        store.scenes.reorder_scenes(populated_project["id"], ordering)
    assert store.scenes.list_scenes(populated_project["id"]) == before


def test_delete_scene_cascades_to_jobs_only(store, populated_project):
    removed = store.scenes.delete_scene("scene-1")
    assert removed == {"video_jobs": 2, "scenes": 1}
    assert store.video_jobs.find_job("job-1") is None
    assert store.video_jobs.find_job("job-2") is None
    assert store.video_jobs.find_job("job-0") is not None
    assert len(store.characters.list_characters(populated_project["id"])) == 2
    with pytest.raises(RecordNotFoundError):
        store.scenes.delete_scene("scene-1")
