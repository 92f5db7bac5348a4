import asyncio
import sys

from aeo_audit import AEOAnalyzer, AEOCategory, AnalysisOptions, FetchError, HttpxFetcher, build_document
from aeo_audit.scoring import format_category_name


SAMPLE_HTML = """
<html>
<head>
  <title>How to Brew Pour-Over Coffee | Example Roasters</title>
  <meta name="description" content="Learn how to brew pour-over coffee at home with a simple recipe, the right grind size and a few minutes of practice.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta property="og:title" content="How to Brew Pour-Over Coffee">
  <script type="application/ld+json">
    {"@context": "https://schema.org", "@type": "HowTo", "name": "Brew pour-over coffee"}
  </script>
</head>
<body>
  <main>
    <h1>How to Brew Pour-Over Coffee</h1>
    <h2>What is pour-over coffee?</h2>
    <p>Pour-over coffee is brewed by pouring hot water over ground coffee in a
       filter so that it drips slowly into a cup below. Maria Lopez from Example
       Roasters recommends a medium-fine grind.</p>
    <h2>Step 1: Heat the water</h2>
    <p>Heat the water to just below boiling before you start.</p>
  </main>
</body>
</html>
"""


def example_1_analyze_html():
    print("\n" + "="*60)
    print("Example 1: analyze raw HTML")
    print("="*60)

    analyzer = AEOAnalyzer()
    result = analyzer.analyze_html("https://example.com/pour-over", SAMPLE_HTML)
    print(f"Overall score: {result.overall_score}/100")
    for category, score in result.category_scores.items():
        print(f"  {format_category_name(category):<32} {score:>3}")


def example_2_top_issues():
    print("\n" + "="*60)
    print("Example 2: top issues and recommendations")
    print("="*60)

    doc = build_document("https://example.com/pour-over", SAMPLE_HTML)
    result = AEOAnalyzer().analyze_document(doc, AnalysisOptions(include_recommendations=True))

    for issue in result.issues[:5]:
        print(f"  [{issue.severity.value}] {issue.category.value}: {issue.title}")
    print("\nRecommendations:")
    for rec in result.recommendations[:5]:
        print(f"  (p{rec.priority}) {rec.title} - ~{rec.implementation_time_minutes} min")


def example_3_category_summary():
    print("\n" + "="*60)
    print("Example 3: single-category drill-down")
    print("="*60)

    doc = build_document("https://example.com/pour-over", SAMPLE_HTML)
    summary = AEOAnalyzer().get_category_summary(doc, AEOCategory.META_TAGS)
    print(f"Meta tags: {summary.score}/100 ({summary.severity.value})")
    for issue in summary.issues:
        print(f"  - {issue.title}")


async def example_4_live_page(url: str):
    print("\n" + "="*60)
    print(f"Example 4: fetch and analyze {url}")
    print("="*60)

    try:
        doc = await HttpxFetcher().fetch(url)
    except FetchError as e:
        print(f"Fetch failed: {e}")
        return

    result = AEOAnalyzer(max_workers=4).quick_analyze(doc)
    print(f"Title: {doc.title or 'N/A'}")
    print(f"Load time: {doc.performance.load_time_ms:.0f}ms")
    print(f"Quick score: {result.overall_score}/100")


async def main():
    print("\n" + "AEO audit examples")
    print("="*60)

    example_1_analyze_html()
    example_2_top_issues()
    example_3_category_summary()
    if len(sys.argv) > 1:
        await example_4_live_page(sys.argv[1])

    print("\n" + "="*60)
    print("Done.")
    print("="*60)


if __name__ == "__main__":
    asyncio.run(main())
