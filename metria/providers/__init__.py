from .base import AnalysisProvider
from .claude_provider import ClaudeAnalysisProvider

__all__ = ["AnalysisProvider", "ClaudeAnalysisProvider"]
