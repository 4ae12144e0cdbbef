"""
DeskCalc
Main application entry point
"""
import atexit
import logging
import os
import subprocess
import sys
import tkinter as tk

import config
from gui import DeskCalcGUI

logger = logging.getLogger(__name__)

# Global variable to track API process
api_process = None


def start_api_server():
    """Start the Flask API server in a separate process"""
    global api_process
    try:
        script_dir = os.path.dirname(os.path.abspath(__file__))
        api_path = os.path.join(script_dir, 'api.py')

        api_process = subprocess.Popen(
            [sys.executable, api_path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            creationflags=subprocess.CREATE_NEW_CONSOLE if sys.platform == 'win32' else 0
        )
        print(f"API server started (PID: {api_process.pid})")
        print("="*60)
        print(f"{config.APP_NAME} web API: http://localhost:{config.WEB_PORT}/api")
        print("="*60)
    except OSError as e:
        logger.error("Failed to start API server: %s", e)


def cleanup_api_server():
    """Terminate the API server when the main application exits"""
    global api_process
    if api_process:
        try:
            api_process.terminate()
            api_process.wait(timeout=5)
            print("API server stopped")
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error("Error stopping API server: %s", e)
        api_process = None


def main():
    config.setup_logging()

    if config.WEB_ENABLED:
        start_api_server()
        atexit.register(cleanup_api_server)

    root = tk.Tk()
    DeskCalcGUI(root)
    root.mainloop()

    cleanup_api_server()


if __name__ == "__main__":
    main()
