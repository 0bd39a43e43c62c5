"""
Load Balancer - route falling packets into a rack of servers
before they melt down.
"""

__version__ = "0.1.0"
