"""
Frontend Layer

Series state, date-window interaction and chart projection.
Rendering itself happens in an injected ChartSink.
"""
