from directors_chair.utils.common_models import CaseInsensitiveEnum


class SceneStatus(str, CaseInsensitiveEnum):
    """Storyboard scene lifecycle"""
    PENDING = 'pending'
    GENERATING = 'generating'
    COMPLETED = 'completed'
    FAILED = 'failed'

    @classmethod
    def _aliases(cls) -> dict:
        return {
            'in-progress': 'generating',
            'in_progress': 'generating',
            'complete': 'completed',
            'error': 'failed',
        }


class VideoJobStatus(str, CaseInsensitiveEnum):
    """Provider job lifecycle"""
    QUEUED = 'queued'
    PENDING = 'pending'
    GENERATING = 'generating'
    COMPLETED = 'completed'
    FAILED = 'failed'
    CANCELLED = 'cancelled'

    @classmethod
    def _aliases(cls) -> dict:
        return {
            'in-progress': 'generating',
            'running': 'generating',
            'complete': 'completed',
            'error': 'failed',
            'canceled': 'cancelled',
        }

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_JOB_STATUSES


TERMINAL_JOB_STATUSES = frozenset({
    VideoJobStatus.COMPLETED,
    VideoJobStatus.FAILED,
    VideoJobStatus.CANCELLED,
})
