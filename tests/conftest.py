import pytest

from directors_chair.main import ProjectStore, startup


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep every test away from the real user data directory"""
    data_root = tmp_path / "user-data"
    monkeypatch.setenv("DIRECTORS_CHAIR_DATA_DIR", str(data_root))
    return data_root


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "store" / "projects.db"


@pytest.fixture
def store(db_path) -> ProjectStore:
    store = startup(db_path)
    assert store.is_available
    yield store
    store.close()


@pytest.fixture
def project(store):
    return store.projects.create_project({"id": "proj-1", "name": "Night Train"})


@pytest.fixture
def populated_project(store, project):
    """A project with two characters, three scenes and jobs on two of them"""
    pid = project["id"]
    store.characters.create_character({"id": "char-a", "project_id": pid, "name": "Ada"})
    store.characters.create_character({"id": "char-b", "project_id": pid, "name": "Bram"})
    for i in range(3):
        store.scenes.create_scene({
            "id": f"scene-{i}",
            "project_id": pid,
            "scene_number": i + 1,
            "sort_order": i,
            "characters": ["char-a", "char-b"],
        })
    store.video_jobs.create_job({"id": "job-0", "scene_id": "scene-0", "provider": "kling", "job_id": "req-0", "cost": 0.3})
    store.video_jobs.create_job({"id": "job-1", "scene_id": "scene-1", "provider": "wan", "job_id": "req-1", "cost": 0.2})
    store.video_jobs.create_job({"id": "job-2", "scene_id": "scene-1", "provider": "minimax", "job_id": "req-2"})
    return project
