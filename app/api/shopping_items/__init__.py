from .shopping_items import router as shopping_items_router

__all__ = ["shopping_items_router"]
