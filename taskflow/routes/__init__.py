"""
Routes package for the TaskFlow application.

This package contains route blueprints:
- health: process liveness probe at /health
- api: REST API endpoints for programmatic access, mounted at /api
- views: HTML page routes for the single-page task board
"""
