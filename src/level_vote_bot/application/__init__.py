"""
Application Layer

Contains use cases, command/query handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: Write operations (accept, vote, remove, reset, export)
- queries/: Read operations (ranking list)
- services/: Access policy, registry gate, vote flow state machine
- interfaces/: Port interfaces for infrastructure adapters
"""
