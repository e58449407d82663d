"""
JobTracker: job-search email classification.

Fetches emails from a mailbox (JSON-RPC gateway or IMAP), asks an LLM
which ones concern a job search, extracts company/position/status from
those, and exports the results and statistics to CSV.

Architecture: mail source -> two-phase LLM classifier -> statistics -> CSV/console
"""

__version__ = "0.1.0"
