from .meals import router as meals_router

__all__ = ["meals_router"]
