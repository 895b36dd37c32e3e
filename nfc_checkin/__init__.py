# =======================================================================================
# nfc_checkin/__init__.py - Package Initialization
# =======================================================================================
"""
NFC Check-in Core - Access Control Lookup and Audit Log Service

Registers NFC card identifiers against employee records and records every
scan as an authorization decision in an append-only, sequenced ledger.
"""

__version__ = "1.0.0"
__author__ = "NFC Check-in Team"
