"""Application layer - Use cases and orchestration.

This layer contains the application's use cases following the CQRS pattern:
- Commands: Write operations that change state (photo upload)
- Queries: Read operations that fetch data (gallery listing, photo fetch)

Structure:
- commands/: Command dataclasses and handlers (write operations)
- queries/: Query dataclasses and handlers (read operations)
- dtos/: Result dataclasses handed to the presentation layer
- errors/: ApplicationError wrapping domain failures

The application layer orchestrates domain logic but contains no business rules.
"""
