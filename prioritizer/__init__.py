"""Transaction prioritizer: choose which transactions to process within a latency budget."""

__version__ = "0.1.0"
