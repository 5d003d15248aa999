"""
FutureGraph - multi-round handwriting analysis workflow engine

Drives ten ordered analysis rounds produced by an AI provider, validates
each round against the FutureGraph laws, gates progression on therapist
approval, and compiles approved rounds into a final report.

Operating principles:
- Rounds are processed in order, never skipped
- Law violations are data for the therapist, not errors
- The therapist, not the engine, decides what is accepted
- A session is never left half-written
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
