"""
Sessionly Modules

Dependency order, leaf first:
- session: Session entity, per-request SessionCache, error types
- api: Pydantic models shared by storage and the HTTP layer
- storage: SessionStore interface and its memory/Redis backends
- middleware: Cookie reconciliation around each request
- config: Environment settings

A module only imports the public names of the modules before it.
"""
