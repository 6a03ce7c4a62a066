"""
Feature modules of the client portal backend.

- auth: cookie sessions, the auth callback and sign-in/out/password endpoints
- board: workspace Kanban boards with fractional task positions
- team: admin invites for agency team members

A module exposes Protocol interfaces, pydantic models and exceptions; the
API layer wires concrete implementations in ``api.dependencies``.
"""
