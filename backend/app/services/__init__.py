"""
Inventra Backend — Services Package
=====================================

    - repository.py:      EntityRepository port + InMemoryRepository
    - entity_service.py:  CRUD orchestration and outcome messages per resource
"""
