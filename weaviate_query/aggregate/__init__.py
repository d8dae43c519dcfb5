"""
@file: __init__.py
Aggregate module public API: Metric, PropertyMetrics, AggregateDescriptor, over_all and render_aggregate.
"""
from .models import AggregateDescriptor, Metric, PropertyMetrics, over_all
from .renderer import render_aggregate
