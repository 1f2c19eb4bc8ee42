import logging
import os
import subprocess
import sys
import time

from recipemark.core.logging_config import setup_logging

API_PORT = os.getenv("RECIPEMARK_API_PORT", "8000")
UI_PORT = os.getenv("RECIPEMARK_UI_PORT", "8501")

setup_logging()
logger = logging.getLogger(__name__)

def run():
    logger.info("🚀 Starting Recipe Markdown...")

    # 1. Start Backend
    logger.info(f"➡️  Starting annotation API on port {API_PORT} (Uvicorn)...")
    backend = subprocess.Popen(
        ["uvicorn", "recipemark.main:app", "--reload", "--port", API_PORT],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True
    )

    # Give the renderer time to load the ingredient database
    time.sleep(2)

    # 2. Start Frontend, pointed at the backend we just started
    logger.info(f"➡️  Starting editor UI on port {UI_PORT} (Streamlit)...")
    frontend_env = dict(os.environ)
    frontend_env.setdefault("API_URL", f"http://127.0.0.1:{API_PORT}/api/render")
    frontend_env.setdefault("API_DOCS_URL", f"http://127.0.0.1:{API_PORT}/docs")
    frontend = subprocess.Popen(
        ["streamlit", "run", "recipemark/frontend.py", "--server.port", UI_PORT],
        stdout=sys.stdout,
        stderr=sys.stderr,
        env=frontend_env
    )

    logger.info("✅ Ready:")
    logger.info(f"   👉 Editor: http://localhost:{UI_PORT}")
    logger.info(f"   👉 API:    http://localhost:{API_PORT}/docs")
    logger.info("Press Ctrl+C to stop both processes.")

    try:
        backend.wait()
        frontend.wait()
    except KeyboardInterrupt:
        logger.info("🛑 Stopping...")
        backend.terminate()
        frontend.terminate()
        logger.info("Done.")

if __name__ == "__main__":
    run()
