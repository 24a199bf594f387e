from __future__ import annotations

from .diff_service import DiffService, DiffResult
from .json_extractor import JsonExtractor
from .content_fetcher import ContentFetcher
from .judge_orchestrator import JudgeOrchestrator
from .review_service import ReviewService

__all__ = [
    "DiffService",
    "DiffResult",
    "JsonExtractor",
    "ContentFetcher",
    "JudgeOrchestrator",
    "ReviewService",
]
