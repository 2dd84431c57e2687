from .chart import (
    ChartDataset, ChartPoint, ChartSink, ChartView, FILL_ALPHA_SUFFIX, project
)

__all__ = [
    'ChartDataset', 'ChartPoint', 'ChartSink', 'ChartView',
    'FILL_ALPHA_SUFFIX', 'project',
]
