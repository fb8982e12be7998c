"""
Domain layer - Business objects of the knowledge base.

This layer contains:
- Entities (Domain, Article, Project) and their create shapes
- Value objects (patches, stats, identifier generation)
- Domain exceptions

No dependencies on infrastructure or frameworks.
"""
