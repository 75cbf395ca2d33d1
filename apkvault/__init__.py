"""
apkvault - back up and reinstall third-party Android apps over ADB.

A small orchestration tool around the Android Debug Bridge:
- Full and differential APK backups (split APKs included)
- Reinstallation of a backed-up set
- One directory per backup, one directory per package
"""

__version__ = "0.1.0"
__author__ = "apkvault Contributors"
