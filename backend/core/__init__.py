"""Core backend infrastructure for the highlights backend.

Configuration, logging, and dependency helpers used by the FastAPI
application entrypoint.
"""
