from jobboard.app import create_app

__all__ = ["create_app"]
