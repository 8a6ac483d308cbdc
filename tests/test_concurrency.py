import threading
import time

from sqlalchemy import text

SCENE_COUNT = text("SELECT COUNT(*) FROM scenes WHERE project_id = :pid")
JOB_COUNT = text(
    "SELECT COUNT(*) FROM video_jobs j JOIN scenes s ON s.id = j.scene_id WHERE s.project_id = :pid"
)


def test_readers_never_see_a_partial_project_delete(store, populated_project):
    pid = populated_project["id"]
    seen = set()
    started = threading.Event()
    stop = threading.Event()
    errors = []

    def reader():
        try:
            while not stop.is_set():
                with store.db_manager.session_scope() as session:
                    scenes = session.execute(SCENE_COUNT, {"pid": pid}).scalar()
                    jobs = session.execute(JOB_COUNT, {"pid": pid}).scalar()
                seen.add((scenes, jobs))
                started.set()
                time.sleep(0.001)
        except Exception as e:
            errors.append(e)
            started.set()

    thread = threading.Thread(target=reader)
    thread.start()
    try:
        assert started.wait(timeout=5)
        removed = store.projects.delete_project(pid)
        # Let the reader observe the finished delete too
        for _ in range(50):
            if (0, 0) in seen:
                break
            time.sleep(0.01)
    finally:
        stop.set()
        thread.join(timeout=5)

    assert not errors
    assert removed["scenes"] == 3 and removed["video_jobs"] == 3
    assert seen <= {(3, 3), (0, 0)}
    assert (3, 3) in seen


def test_close_waits_for_unit_of_work_in_flight(store, project):
    entered = threading.Event()
    release = threading.Event()
    order = []

    def worker():
        with store.db_manager.session_scope() as session:
            entered.set()
            release.wait(timeout=5)
            session.execute(text("SELECT COUNT(*) FROM projects")).scalar()
            order.append("work_done")

    def closer():
        store.close()
        order.append("closed")

    work = threading.Thread(target=worker)
    work.start()
    assert entered.wait(timeout=5)

    close = threading.Thread(target=closer)
    close.start()
    close.join(timeout=0.2)
    assert close.is_alive()
    assert order == []

    release.set()
    work.join(timeout=5)
    close.join(timeout=5)

    assert order == ["work_done", "closed"]
    assert not store.is_available
