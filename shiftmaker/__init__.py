"""Shift scheduling for small restaurant teams.

Modules:
- config: load and validate configuration (YAML or JSON)
- domain: SQLAlchemy models, warnings and repositories
- services: week windows, eligibility, audits, manual-edit checks, summaries
- engine: greedy month scheduler and the orchestrator around it
- io: CSV import and seed data
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
