from .activities import router as activities_router

__all__ = ["activities_router"]
