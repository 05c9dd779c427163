"""
Supply Chain Logistics Reports

Descriptive statistics over the supply-chain dataset: order volumes, weight
distributions, capacity utilization, carrier on-time rates and freight plus
warehouse cost aggregation.
"""

from .version import VERSION

__all__ = ["VERSION"]
