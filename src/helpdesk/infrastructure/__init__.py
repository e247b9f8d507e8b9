"""
Infrastructure Layer
=====================

Low-level technical concerns shared by all modules:
- Database engine lifecycle
- Persistence Adapter (query / run / get)
"""
