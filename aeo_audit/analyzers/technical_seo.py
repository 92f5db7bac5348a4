"""
Technical SEO analyzer: penalizes performance budget breaches from a base
score of 60.
"""

from typing import List

from ..helpers import clamp_score
from ..models import (
    AnalyzerIssue,
    AnalyzerRecommendation,
    AnalyzerResult,
    DocumentModel,
    Severity,
)


BASE_SCORE = 60
MAX_LOAD_TIME_MS = 3000
MAX_PAGE_SIZE_BYTES = 3_000_000
GOOD_LCP_MS = 2500
GOOD_FID_MS = 100
GOOD_CLS = 0.1


def analyze(doc: DocumentModel, quick: bool = False) -> AnalyzerResult:
    issues: List[AnalyzerIssue] = []
    perf = doc.performance
    score = BASE_SCORE

    if perf.load_time_ms > MAX_LOAD_TIME_MS:
        issues.append(AnalyzerIssue(
            severity=Severity.HIGH,
            title="Slow Page Load Time",
            description=f"Page loads in {perf.load_time_ms:.0f}ms. Target: <{MAX_LOAD_TIME_MS}ms",
            impact="Poor user experience and search rankings",
        ))
        score -= 20

    if perf.page_size_bytes > MAX_PAGE_SIZE_BYTES:
        issues.append(AnalyzerIssue(
            severity=Severity.MEDIUM,
            title="Large Page Size",
            description=f"Page size: {perf.page_size_bytes / 1024 / 1024:.1f}MB",
            impact="Slower loading, especially on mobile",
        ))
        score -= 10

    cwv = perf.core_web_vitals
    if cwv is not None:
        if cwv.lcp is not None and cwv.lcp > GOOD_LCP_MS:
            issues.append(AnalyzerIssue(
                severity=Severity.MEDIUM,
                title="Poor Largest Contentful Paint",
                description=f"LCP: {cwv.lcp:.0f}ms. Target: <{GOOD_LCP_MS}ms",
                impact="Poor Core Web Vitals score",
            ))
            score -= 15
        if cwv.fid is not None and cwv.fid > GOOD_FID_MS:
            issues.append(AnalyzerIssue(
                severity=Severity.LOW,
                title="Slow First Input Delay",
                description=f"FID: {cwv.fid:.0f}ms. Target: <{GOOD_FID_MS}ms",
                impact="Page feels unresponsive to first interaction",
            ))
            score -= 5
        if cwv.cls is not None and cwv.cls > GOOD_CLS:
            issues.append(AnalyzerIssue(
                severity=Severity.LOW,
                title="High Cumulative Layout Shift",
                description=f"CLS: {cwv.cls:.2f}. Target: <{GOOD_CLS}",
                impact="Layout shifts disrupt reading and extraction",
            ))
            score -= 5

    return AnalyzerResult(
        score=clamp_score(score),
        issues=issues,
        recommendations=[AnalyzerRecommendation(
            priority=2,
            title="Optimize Technical Performance",
            description="Improve page speed, Core Web Vitals, and mobile optimization",
            estimated_impact=20,
            implementation_time_minutes=60,
        )],
    )
