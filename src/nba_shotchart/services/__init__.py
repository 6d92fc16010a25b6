from .shot_service import ShotService

__all__ = ["ShotService"]
