"""
Integration Tests Package

Engine-level tests wiring ingestion, store and chart projection.

TEST AXIOMS:
=============
1. Series are complete before the store changes
2. Failed commands leave the store untouched
3. Explicit failure: every terminal error reaches the status sink
"""
