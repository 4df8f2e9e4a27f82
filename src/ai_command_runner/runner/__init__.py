"""Single-run command pipeline.

Provides:
- Settings loaded from .env
- Structured logging
- Command reading, prompt building and response parsing
- Sandboxed file actions with an append-only audit log
- Best-effort git publishing
"""
