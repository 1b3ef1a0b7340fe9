"""Packaging for PomoFocus.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "PomoFocus",
        "CFBundleDisplayName": "PomoFocus",
        "CFBundleIdentifier": "com.pomofocus.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

setup(
    app=APP,
    data_files=DATA_FILES,
    options={"py2app": OPTIONS},
    name="PomoFocus",
    version="0.1.0",
    packages=find_packages(include=["pomofocus", "pomofocus.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "gui_scripts": ["pomofocus = pomofocus.__main__:main"],
    },
)
