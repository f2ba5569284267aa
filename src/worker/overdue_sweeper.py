"""Overdue Sweep Background Worker

Daily transition of sent invoices past their due date to overdue, across
all organizations. Can be run as a standalone script or from a scheduler.
"""

import asyncio
import logging
from typing import Optional

from config import ApplicationConfig
from src.adapter.database import build_engine, build_session_factory
from src.adapter.services.clock import SystemClock
from src.adapter.wiring import UseCaseFactory
from src.app.services.clock import Clock
from src.app.use_cases.invoicing import SweepResultDTO

logger = logging.getLogger(__name__)


class OverdueSweeperWorker:
    """
    Background worker for the overdue sweep

    Features:
    - No user context; every organization is swept
    - Idempotent: a repeated run transitions nothing new
    - Can run once or continuously (default: daily)

    Usage:
        # Run once
        worker = OverdueSweeperWorker()
        result = await worker.run_once()

        # Run continuously
        worker = OverdueSweeperWorker()
        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(self, db_uri: Optional[str] = None, clock: Optional[Clock] = None):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            clock: Time source (defaults to the system UTC clock)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.clock = clock or SystemClock()

        self.engine = build_engine(self.db_uri)
        self.async_session_factory = build_session_factory(self.engine)

        logger.info("OverdueSweeperWorker initialized")

    async def run_once(self) -> SweepResultDTO:
        """
        Run the sweep once

        Returns:
            SweepResultDTO with the transitioned invoices
        """
        if not ApplicationConfig.OVERDUE_SWEEP_ENABLED:
            logger.info("Overdue sweep is disabled, skipping")
            return SweepResultDTO(
                sweep_date=self.clock.today(),
                candidates_found=0,
                invoices_transitioned=0,
                failed_transitions=0,
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            use_cases = UseCaseFactory(session, user_id=None, clock=self.clock)
            result = await use_cases.sweep_overdue_invoices().execute_all()

            if result.is_err():
                logger.error(f"Overdue sweep failed: {result.error.message}")
                raise RuntimeError(f"Overdue sweep failed: {result.error.message}")

            response = result.value

            if response.failed_transitions > 0:
                logger.error(
                    f"ALERT: {response.failed_transitions} invoices could not be marked overdue"
                )

            return response

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Run the sweep continuously at the given interval

        Args:
            interval_seconds: Seconds between runs (default: 24 hours)
        """
        logger.info(f"Starting continuous overdue sweep with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Overdue sweep cycle complete. "
                    f"{result.invoices_transitioned} of {result.candidates_found} candidates "
                    f"marked overdue in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Overdue sweep cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueSweeperWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.overdue_sweeper --once

        # Run continuously (default: OVERDUE_SWEEP_INTERVAL_SECONDS)
        python -m src.worker.overdue_sweeper

        # Run continuously with custom interval (in seconds)
        python -m src.worker.overdue_sweeper --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Sweep Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.OVERDUE_SWEEP_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: 86400 = 24 hours)"
    )
    args = parser.parse_args()

    worker = OverdueSweeperWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Overdue sweep complete:")
            print(f"  Sweep date: {result.sweep_date}")
            print(f"  Candidates found: {result.candidates_found}")
            print(f"  Invoices marked overdue: {result.invoices_transitioned}")
            print(f"  Failed: {result.failed_transitions}")
            print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
