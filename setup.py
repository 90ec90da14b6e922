"""Setup for Countdown.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,  # Replace with .icns path when a proper icon exists
    "plist": {
        "CFBundleName": "Countdown",
        "CFBundleDisplayName": "Countdown",
        "CFBundleIdentifier": "com.countdown.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

py2app_kwargs = {}
if "py2app" in sys.argv:
    py2app_kwargs = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="Countdown",
    version="0.1.0",
    packages=["countdown", "countdown.timer", "countdown.ui"],
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
    **py2app_kwargs,
)
