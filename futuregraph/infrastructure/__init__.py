"""Infrastructure for FutureGraph: logging, storage stubs and AI adapters."""
