"""
DeskCalc Web Portal Launcher
Simple script to start the web server
"""
import sys

import config

print("Starting DeskCalc Web Portal...")
print()

try:
    from api import app
except ImportError as e:
    print(f"Error importing modules: {e}")
    print("\nMake sure you have installed the required dependencies:")
    print("  pip install -e .")
    sys.exit(1)

config.setup_logging()
try:
    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
except OSError as e:
    print(f"Error starting server: {e}")
    print("\nTroubleshooting:")
    print("1. Check if another application is using the port")
    print("2. Check firewall settings")
    sys.exit(1)
