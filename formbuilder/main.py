"""Main FastAPI application"""
from fastapi import FastAPI
from formbuilder.config import get_settings
from formbuilder.middleware.cors import setup_cors
from formbuilder.middleware.error_handler import setup_error_handlers
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Form Builder API",
    description="Create forms, share them by link and collect submissions",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Setup CORS
setup_cors(app)

# Render errors as {"error": ...}
setup_error_handlers(app)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "formbuilder", "environment": get_settings().environment}

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Form Builder API",
        "version": "1.0.0",
        "docs": "/docs"
    }

# Import and include routers
from formbuilder.routers import forms

app.include_router(forms.router, prefix="/forms", tags=["Forms"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
