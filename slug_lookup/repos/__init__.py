"""
Document store implementations.

Implementation packages:
- memory: In-memory store for testing
- minio: MinIO-based store for persistent deployments
"""
