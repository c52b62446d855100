# launcher.py
import logging
import multiprocessing
import os
import sys
import time

from dotenv import load_dotenv

# --- Constants ---
ENV_FILE = ".env"

# --- Logging configuration ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - [Launcher] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("Launcher")


def start_api_server():
    from uvicorn import Config, Server
    from app.main import app as fastapi_app

    # Reload ENV in case the port changed
    load_dotenv(ENV_FILE, override=True)

    host = os.getenv("UVICORN_HOST", "0.0.0.0")
    port = int(os.getenv("UVICORN_PORT", 8000))

    config = Config(app=fastapi_app, host=host, port=port, log_level="info")
    try:
        Server(config).run()
    except KeyboardInterrupt:
        pass


def run_single_check():
    """Manual mode: one reminder cycle, then exit."""
    from app.services.reminder_job import run_reminder_check

    logger.info("🧪 Running a single reminder check...")
    run_reminder_check()
    logger.info("✅ Check completed")


if __name__ == "__main__":
    # A. Load configuration
    load_dotenv(ENV_FILE)

    # B. Initialize database (tables + default settings/service types)
    from app.db.init_db import setup_databases

    setup_databases()

    if "--check-once" in sys.argv:
        run_single_check()
        sys.exit(0)

    # C. Start
    port = os.getenv("UVICORN_PORT", "8000")
    print("-" * 60)
    print("🚀 Service Reminder Tracker")
    print(f"   🔌 Local:     http://localhost:{port}")
    print("   ℹ️  Single reminder check: python launcher.py --check-once")
    print("-" * 60)

    from app.scheduler import run_scheduler

    p_api = multiprocessing.Process(target=start_api_server, name="API")
    p_scheduler = multiprocessing.Process(target=run_scheduler, name="Scheduler")

    try:
        p_api.start()
        time.sleep(2)
        p_scheduler.start()

        p_api.join()
        p_scheduler.join()
    except KeyboardInterrupt:
        print("\n🛑 Shutting down...")
        for p in [p_api, p_scheduler]:
            if p.is_alive():
                p.terminate()
        sys.exit(0)
