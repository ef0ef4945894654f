"""Integration adapters for the DATEVconnect REST APIs.

Keep these modules small and testable:
- No host/dispatch concerns
- Pure IO + response interpretation
"""
