"""Adapters to external services."""

from futuregraph.infrastructure.adapters.openai_analysis_gateway import (
    OpenAIAnalysisGateway,
)

__all__: list[str] = ["OpenAIAnalysisGateway"]
