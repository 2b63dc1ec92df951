"""CORS middleware configuration"""
from fastapi.middleware.cors import CORSMiddleware
from formbuilder.config import get_settings


def setup_cors(app):
    """
    Let the form builder frontend (CORS_ORIGINS, http://localhost:5173 by
    default) call the API from the browser

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
