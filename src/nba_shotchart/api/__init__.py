from .app import create_app, fail, ok

__all__ = ["create_app", "fail", "ok"]
