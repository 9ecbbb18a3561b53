"""Advice excerpts served during onboarding."""

from .formatter import format_advice_text
from .schemas import AdviceRead, AdviceRequest
from .services import AdviceService

__all__ = ["AdviceRead", "AdviceRequest", "AdviceService", "format_advice_text"]
