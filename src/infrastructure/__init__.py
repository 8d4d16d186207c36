"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- storage/: Photo storage backends (S3, local filesystem) and their router
- sse/: Topic registry, broadcast fan-out and heartbeats
- imaging/: Pillow-based image conversion
- persistence/: Upload metadata recording
- topics/: Event code to topic resolution
- logging/: Structured logging

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
