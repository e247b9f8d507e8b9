"""
Helpdesk
========

Support ticketing service: tickets with SLA tracking and comment threads
behind a REST API.
"""

__version__ = "1.0.0"
