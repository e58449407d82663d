"""
Unit tests for JobTracker.

Test individual components in isolation:
- Data models (aliases, defaults, immutability)
- Prompt builder (truncation, status listing)
- Response parser and status normalizer
- Analyzer (ordering, skips, cancellation, deadline)
- Mail sources (gateway JSON-RPC, IMAP parsing, mock)
- CSV export, console report and CLI
"""
