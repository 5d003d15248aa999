"""Application layer for FutureGraph: ports, DTOs and the workflow service."""
