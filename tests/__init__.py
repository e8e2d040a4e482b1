"""Test package for the DBSCAN clustering project.

This package contains:
- Unit tests (test_engine.py, test_neighbors.py, test_assembly.py,
  test_spatial.py, test_config.py)
- End-to-end clustering tests (test_dbscan.py)
- Shared fixtures (conftest.py)
"""
