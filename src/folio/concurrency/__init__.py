"""Bounded async pool for image batches."""

from folio.concurrency.pool import ConcurrencyPool

__all__ = ["ConcurrencyPool"]
