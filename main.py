"""Main entry point for running the FastAPI application with auto-reload."""
import uvicorn

from marble.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.app_name} v{settings.version}")
    print(f"Debug mode: {settings.debug}")
    print(f"Database: {settings.db.url.split('@')[-1] if '@' in settings.db.url else 'SQLite'}")
    print(f"Public files: {settings.storage.public_dir}")
    print(f"Auto-reload: {'Enabled' if settings.debug else 'Disabled'}")
    print("-" * 50)

    uvicorn.run(
        "marble.api:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        reload_dirs=["marble"] if settings.debug else None,
        log_level=settings.logging.level.lower(),
    )
