"""Background workers for the invoice service"""
from .overdue_sweeper import OverdueSweeperWorker

__all__ = ["OverdueSweeperWorker"]
