"""
Aporte App - Contribution Director for Real-Estate Fund Portfolios

Decides which fund holdings to top up with a fixed cash contribution, by how
much and in what order, combining target-allocation imbalance with the discount
each fund trades at relative to its configured ceiling price.
"""

__version__ = "1.0.0"
__author__ = "Aporte Team"
