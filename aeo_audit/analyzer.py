"""
AEOAnalyzer: main orchestrator for AEO audits.

Runs the category analyzers over one DocumentModel, isolates per-category
failures, and aggregates the results into a weighted scorecard with ranked
issues and recommendations.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .analyzers import ANALYZERS, Analyzer
from .extract import build_document
from .helpers import severity_from_score
from .models import (
    AEOCategory,
    AnalysisOptions,
    AnalysisResult,
    AnalysisStatus,
    AnalyzerResult,
    CategoryIssue,
    CategoryRecommendation,
    CategorySummary,
    DocumentModel,
    PerformanceMetrics,
)
from .scoring import SEVERITY_RANK, calculate_overall_score

logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"

_HEALTH_CHECK_DOC = DocumentModel(
    url="https://example.com",
    title="Test",
    meta_description="Test description",
    content="Test content",
    performance=PerformanceMetrics(load_time_ms=0, page_size_bytes=0),
)


class AEOAnalyzer:
    """
    Answer-engine-optimization analyzer over DocumentModel objects.

    Usage, default registry, sequential:
        analyzer = AEOAnalyzer()
        result = analyzer.analyze_document(doc, include_recommendations=True)

    Usage, custom registry on a thread pool:
        analyzer = AEOAnalyzer(analyzers={...}, max_workers=4)
    """

    def __init__(
        self,
        analyzers: Optional[Mapping[AEOCategory, Analyzer]] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._analyzers: Dict[AEOCategory, Analyzer] = dict(
            ANALYZERS if analyzers is None else analyzers
        )
        self._max_workers = max_workers

    def analyze_document(
        self,
        doc: DocumentModel,
        options: Optional[AnalysisOptions] = None,
        **kwargs,
    ) -> AnalysisResult:
        """
        Run the requested category analyzers and aggregate their results.

        Args:
            doc: The page to score. Read-only for the whole run.
            options: AnalysisOptions; keyword arguments with the same names
                are accepted as a shorthand.

        Returns:
            AnalysisResult with all ten category scores populated. A failing
            or missing analyzer scores 0 for its category; it never fails
            the run.
        """
        if options is None:
            options = AnalysisOptions(**kwargs)
        requested = AEOCategory if options.categories is None else options.categories
        categories = list(dict.fromkeys(requested))

        logger.info(f"Starting AEO analysis: {doc.url}")

        category_scores: Dict[AEOCategory, int] = {}
        issues: List[CategoryIssue] = []
        recommendations: List[CategoryRecommendation] = []

        for category, result in self._run(doc, categories, options.quick):
            if result is None:
                category_scores[category] = 0
                continue

            category_scores[category] = result.score
            issues.extend(
                CategoryIssue(category=category, **issue.model_dump())
                for issue in result.issues
            )
            if options.include_recommendations:
                recommendations.extend(
                    CategoryRecommendation(category=category, **rec.model_dump())
                    for rec in result.recommendations
                )

        for category in AEOCategory:
            category_scores.setdefault(category, 0)
        full_scores = {category: category_scores[category] for category in AEOCategory}

        overall_score = calculate_overall_score(full_scores)

        # list.sort is stable: equal keys keep their collection order.
        issues.sort(key=lambda issue: SEVERITY_RANK[issue.severity])
        recommendations.sort(key=lambda rec: rec.priority)

        logger.info(
            f"AEO analysis completed: {doc.url} "
            f"(score={overall_score}, issues={len(issues)})"
        )

        return AnalysisResult(
            overall_score=overall_score,
            category_scores=full_scores,
            issues=issues,
            recommendations=recommendations,
            status=AnalysisStatus.COMPLETED,
        )

    def quick_analyze(self, doc: DocumentModel) -> AnalysisResult:
        """Coarse pass: analyzers skip deep checks, no recommendations."""
        return self.analyze_document(
            doc, AnalysisOptions(quick=True, include_recommendations=False)
        )

    def analyze_categories_only(
        self, doc: DocumentModel, categories: Sequence[AEOCategory]
    ) -> AnalysisResult:
        return self.analyze_document(
            doc,
            AnalysisOptions(categories=list(categories), include_recommendations=True),
        )

    def analyze_html(
        self,
        url: str,
        html: str,
        options: Optional[AnalysisOptions] = None,
        **kwargs,
    ) -> AnalysisResult:
        """
        Build the document from raw HTML and analyze it.

        Useful for standalone analysis or testing.
        """
        return self.analyze_document(build_document(url, html), options, **kwargs)

    def get_category_summary(
        self, doc: DocumentModel, category: AEOCategory
    ) -> CategorySummary:
        """Drill down into one category; severity is derived from the score."""
        analyzer = self._analyzers.get(category)
        if analyzer is None:
            raise KeyError(f"No analyzer found for category: {category.value}")

        result = analyzer(doc, False)
        return CategorySummary(
            category=category,
            score=result.score,
            severity=severity_from_score(result.score),
            issues=[
                CategoryIssue(category=category, **issue.model_dump())
                for issue in result.issues
            ],
            recommendations=[
                CategoryRecommendation(category=category, **rec.model_dump())
                for rec in result.recommendations
            ],
        )

    def health_check(self) -> Dict[AEOCategory, bool]:
        """Run every registered analyzer against a minimal synthetic page."""
        status: Dict[AEOCategory, bool] = {}
        for category, analyzer in self._analyzers.items():
            try:
                analyzer(_HEALTH_CHECK_DOC, True)
                status[category] = True
            except Exception:
                logger.exception(f"Analyzer health check failed for {category.value}")
                status[category] = False
        return status

    def get_analysis_stats(self) -> Dict[str, object]:
        return {
            "total_analyzers": len(self._analyzers),
            "available_categories": list(self._analyzers),
            "version": ENGINE_VERSION,
        }

    # ─── Internals ────────────────────────────────────────────────────

    def _run_one(
        self, doc: DocumentModel, category: AEOCategory, quick: bool
    ) -> Optional[AnalyzerResult]:
        analyzer = self._analyzers.get(category)
        if analyzer is None:
            logger.warning(f"No analyzer found for category: {category.value}")
            return None
        try:
            return analyzer(doc, quick)
        except Exception:
            logger.exception(f"Analysis failed for category {category.value}")
            return None

    def _run(
        self, doc: DocumentModel, categories: List[AEOCategory], quick: bool
    ) -> List[Tuple[AEOCategory, Optional[AnalyzerResult]]]:
        """Results in requested-category order, whether run serially or pooled."""
        if not self._max_workers or self._max_workers <= 1 or len(categories) <= 1:
            return [(c, self._run_one(doc, c, quick)) for c in categories]

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            results = list(pool.map(lambda c: self._run_one(doc, c, quick), categories))
        return list(zip(categories, results))
