"""Application layer - Use cases and orchestration.

This layer contains the application's use cases following the CQRS pattern:
- Commands: Write operations (record event, issue/revoke keys, drop cache)
- Queries: Read operations (event summary, user stats, key listing)
- Services: Aggregation engine and API key authentication

Structure:
- commands/: Command dataclasses and handlers (write operations)
- queries/: Query dataclasses and handlers (read operations)
- services/: Logic shared by several handlers
- dtos/: Results handed back to the presentation layer

The application layer orchestrates domain logic but contains no business rules.
"""
