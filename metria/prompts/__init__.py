from .analysis import SYSTEM_PROMPT, format_analysis_prompt

__all__ = ["SYSTEM_PROMPT", "format_analysis_prompt"]
