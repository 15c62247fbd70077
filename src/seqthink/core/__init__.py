"""Thought ledger, validation and step-recommendation bookkeeping."""
