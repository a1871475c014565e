"""
Integration test package for TaskFlow.

Tests use the Flask test client and demonstrate:
- CRUD operation testing
- Input validation testing
- Error handling testing
- Task board flows with a stubbed HTTP layer
"""
