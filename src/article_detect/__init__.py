"""ArticleDetect - crawl a news listing and score each article for AI-generated text."""

__version__ = "0.1.0"

from article_detect.batch import BatchOrchestrator
from article_detect.codec import encode
from article_detect.crawler import crawl
from article_detect.models import AnalysisRecord, CrawlResult

__all__ = ["AnalysisRecord", "BatchOrchestrator", "CrawlResult", "crawl", "encode"]
