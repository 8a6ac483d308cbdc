from directors_chair.main import ProjectStore, startup, shutdown, get_app_data_dir

__all__ = ["ProjectStore", "startup", "shutdown", "get_app_data_dir"]
