from gdocmd.gateway.api.v1.markdown import router as markdown_router

__all__ = ["routers"]
routers = [markdown_router]
