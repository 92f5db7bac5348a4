"""
Docker container entrypoint for AEO audit jobs.

Receives job parameters via environment variables, fetches the page, runs
the AEO analysis, optionally requests generated fixes for weak categories,
then POSTs results back to the callback URL (or prints them when no
callback is configured).

Environment variables:
    START_URL           - URL of the page to audit (required)
    CALLBACK_URL        - Endpoint to POST results to (optional)
    API_KEY             - Bearer token for the callback
    QUICK               - "1"/"true" for a quick pass (default: off)
    CATEGORIES          - Comma-separated category keys (default: all)
    FIX_ENDPOINT        - Fix-generation service URL (optional)
    FIX_API_KEY         - Bearer token for the fix service
    MAX_FIX_CATEGORIES  - Max categories to request fixes for (default: 3)
    FETCH_TIMEOUT       - Fetch timeout in seconds (default: 10)
"""

import os
import sys
import json
import asyncio
import logging
import httpx

from aeo_audit import (
    AEOAnalyzer,
    AEOCategory,
    AnalysisOptions,
    HttpFixGenerator,
    HttpxFetcher,
    dispatch_fixes,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("aeo-audit-runner")


def _flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


def _categories():
    raw = os.environ.get("CATEGORIES", "").strip()
    if not raw:
        return None
    return [AEOCategory(key.strip()) for key in raw.split(",") if key.strip()]


async def _post(url: str, payload: dict, api_key: str, timeout: float) -> None:
    async with httpx.AsyncClient(timeout=timeout) as client:
        resp = await client.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {api_key}"} if api_key else {},
        )
        resp.raise_for_status()


async def run():
    start_url = os.environ["START_URL"]
    callback_url = os.environ.get("CALLBACK_URL", "")
    api_key = os.environ.get("API_KEY", "")
    fix_endpoint = os.environ.get("FIX_ENDPOINT", "")
    fix_api_key = os.environ.get("FIX_API_KEY", "")
    max_fix_categories = int(os.environ.get("MAX_FIX_CATEGORIES", "3"))
    fetch_timeout = float(os.environ.get("FETCH_TIMEOUT", "10"))

    options = AnalysisOptions(
        categories=_categories(),
        quick=_flag("QUICK"),
        include_recommendations=True,
    )
    logger.info(f"Starting audit for {start_url} (quick={options.quick})")

    try:
        doc = await HttpxFetcher(timeout=fetch_timeout).fetch(start_url)

        result = AEOAnalyzer().analyze_document(doc, options)
        logger.info(f"Audit complete. Score: {result.overall_score}/100")

        fixes = []
        if fix_endpoint:
            generator = HttpFixGenerator(fix_endpoint, api_key=fix_api_key)
            fixes = await dispatch_fixes(result, doc, generator, limit=max_fix_categories)

        payload = {
            "status": result.status.value,
            "url": doc.url,
            "result": result.model_dump(mode="json"),
            "fixes": [fix.model_dump(mode="json") for fix in fixes],
        }

        if callback_url:
            await _post(callback_url, payload, api_key, timeout=120)
            logger.info(f"Results posted to {callback_url}. Done.")
        else:
            print(json.dumps(payload, indent=2))

    except Exception as e:
        logger.error(f"Audit failed: {e}", exc_info=True)
        if callback_url:
            try:
                await _post(callback_url, {"status": "failed", "error": str(e)}, api_key, timeout=30)
            except httpx.HTTPError:
                logger.error("Failed to report error to callback URL")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(run())
