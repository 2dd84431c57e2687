"""
Rating History Backend

Orchestration for the rating history pipeline. Each layer communicates
only through explicit contracts, never through shared mutable state.

LAYER STRUCTURE:
================

1. INGESTION LAYER (ingestion/)
   - Responsibility: CSV parsing, remote archive fetching, CSV export
   - Outputs: canonical ascending RatingSample tuples
   - MUST NOT: Touch the series store

2. STATE LAYER (frontend/state/)
   - Responsibility: Named, colored series; name uniqueness
   - MUST NOT: Parse, fetch or render

3. VISUALIZATION LAYER (frontend/visualization/, frontend/mapper.py)
   - Responsibility: Date-window projection into read-only chart views
   - MUST NOT: Mutate series

4. ENGINE (backend/engine.py)
   - Responsibility: Command handlers wiring the layers together
"""
