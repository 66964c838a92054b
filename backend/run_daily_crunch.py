"""
Daily crunch: analyze every active symbol once per trading day.
Run with: python run_daily_crunch.py [snapshots.json]
"""

import asyncio
import os
import sys

# Set working directory
backend_dir = os.path.dirname(os.path.abspath(__file__))
os.chdir(backend_dir)
sys.path.insert(0, backend_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(backend_dir, ".env"))


async def run_crunch(snapshot_file: str = None):
    """Run the batch analysis and print a summary."""
    from nepse_analyzer.schemas.analysis import BatchAnalysisRequest
    from nepse_analyzer.services.analysis import AnalysisService
    from nepse_analyzer.services.data_ingestion import (
        InMemorySnapshotSource,
        get_snapshot_source,
    )

    if snapshot_file:
        source = InMemorySnapshotSource.from_json_file(snapshot_file)
    else:
        source = get_snapshot_source()

    service = AnalysisService(source=source)

    print("\n" + "=" * 60)
    print("NEPSE ANALYZER - DAILY CRUNCH")
    print("=" * 60)

    result = await service.execute(BatchAnalysisRequest())

    print(f"As of: {result.as_of}")
    print(f"Analyzed: {len(result.results)}")
    print(f"Skipped (short history): {len(result.skipped)}")
    print(f"Errors: {result.errors}")

    for analysis in result.results:
        print(f"  {analysis.symbol:<10} {analysis.recommendation.value:<12} score={analysis.score:.1f}")

    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(run_crunch(sys.argv[1] if len(sys.argv) > 1 else None))
