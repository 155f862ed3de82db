from customizations.api.routes import function_router

__all__ = ["function_router"]
