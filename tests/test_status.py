import pytest

from directors_chair.database.models import SceneStatus, VideoJobStatus


@pytest.mark.parametrize("value,expected", [
    ("pending", SceneStatus.PENDING),
    ("  Generating ", SceneStatus.GENERATING),
    ("in_progress", SceneStatus.GENERATING),
    ("Complete", SceneStatus.COMPLETED),
    ("ERROR", SceneStatus.FAILED),
])
def test_scene_status_accepts_known_spellings(value, expected):
    assert SceneStatus(value) is expected


@pytest.mark.parametrize("value,expected", [
    ("QUEUED", VideoJobStatus.QUEUED),
    ("running", VideoJobStatus.GENERATING),
    ("canceled", VideoJobStatus.CANCELLED),
])
def test_job_status_accepts_known_spellings(value, expected):
    assert VideoJobStatus(value) is expected


def test_unknown_status_rejected():
    with pytest.raises(ValueError):
        SceneStatus("queued")
    with pytest.raises(ValueError):
        VideoJobStatus(None)


def test_terminal_job_statuses():
    terminal = {s for s in VideoJobStatus if s.is_terminal}
    assert terminal == {VideoJobStatus.COMPLETED, VideoJobStatus.FAILED, VideoJobStatus.CANCELLED}
