"""
Test suite for the TaskFlow application.

This package contains:
- unit/: model, schema, repository, configuration, client and server tests
- integration/: REST API and task board tests through the Flask test client
- contracts/: responses validated against contracts/openapi.yaml
- security/: adversarial input handling
- smoke/: checks against a running server
"""
