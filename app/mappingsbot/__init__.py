"""mappingsbot - Chat commands for looking up names across mappings namespaces.

Resolves mappings versions, gates commands through allow/ban checks and
presents lookup results as paginated, expiring sessions.
"""

__version__ = "0.1.0"
