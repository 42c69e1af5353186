"""
Sessionly - Cookie Sessions for FastAPI

Server-side session state keyed by an opaque cookie identifier.

Architecture:
- Each module is self-contained with clear interfaces
- Storage backends are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- session: Session entity and the per-request session cache
- storage: Session persistence abstraction and backends
- middleware: Request/response session lifecycle
- config: Environment configuration
- api: Shared data models
"""

__version__ = "1.0.0"
