#!/usr/bin/env python3
"""
Template Helpers for modelboard Dashboard
"""

import time


def format_datetime(timestamp):
    """Format timestamp as full datetime string."""
    if not timestamp:
        return ""
    try:
        return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(timestamp))
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def format_axis_tick(value):
    """Format a y-axis tick (0.75 -> '0.75')."""
    try:
        return f"{float(value):.2f}"
    except (TypeError, ValueError):
        return str(value)


def axis_ticks(domain, steps=5):
    """Evenly spaced tick values across the chart's y-axis window, top first."""
    low, high = domain
    step = (high - low) / steps
    return [high - i * step for i in range(steps + 1)]


def setup_template_filters(templates):
    """Setup all template filters in Jinja2 environment."""
    templates.env.filters['format_datetime'] = format_datetime
    templates.env.filters['format_axis_tick'] = format_axis_tick
    templates.env.globals['axis_ticks'] = axis_ticks
