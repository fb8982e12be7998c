"""
Tests for the Knowledge Base service

Tests are organized by functionality:
- test_entities.py: Entity and patch value objects
- test_storage.py: Storage contract, run against every backend
- test_seed.py: Bootstrap catalog and storage lifecycle
- test_api.py: HTTP endpoints through FastAPI's TestClient
- test_config.py: Settings parsing
- test_cli.py: manage_content CLI commands
"""

__version__ = "0.1.0"
