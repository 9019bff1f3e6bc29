"""
Top-level package for the Wedding Planner API.

The package provides no public exports; all functionality lives in
submodules under ``app``, e.g. ``wedding_planner_api.app.main``.
"""

__all__ = []
