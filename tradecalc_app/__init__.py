"""
TradeCalc App - Leverage Trading P&L Calculator

Computes fees, price deltas, net P&L and ROI for leveraged long/short
positions, and suggests take-profit/stop-loss levels from a fixed risk
policy. Fee tables and risk parameters come from a remote configuration
sheet with local and built-in fallbacks.
"""

__version__ = "0.1.0"
__author__ = "TradeCalc Team"
