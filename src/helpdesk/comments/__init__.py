"""
Comment Thread Module
=====================

Bounded context for the comment threads attached to tickets. A comment
can only be created against a ticket that exists at that moment.
"""
