# Development server for the preferences service using in-memory persistence
from prefs_lib.config import load_config
from prefs_lib.logging_config import configure_logging
from prefs_lib.server import create_app

configure_logging(level="DEBUG")
app = create_app(load_config())
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
